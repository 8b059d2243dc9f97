from ..extensions import db
from .base import TimestampMixin, isoformat

RECOMMENDATIONS = ("strong_hire", "hire", "no_hire", "strong_no_hire")
FEEDBACK_SCORES = ("technical_score", "communication_score", "problem_solving_score", "cultural_fit_score")


class InterviewFeedback(db.Model, TimestampMixin):
    """One interviewer's structured assessment of an interview (scores 0-100)."""
    __tablename__ = "interview_feedback"
    __table_args__ = (
        db.UniqueConstraint("interview_id", "interviewer_id", name="uq_interview_feedback_interviewer"),
    )

    id = db.Column(db.Integer, primary_key=True)
    interview_id = db.Column(db.Integer, db.ForeignKey("interviews.id"), nullable=False, index=True)
    interviewer_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)

    technical_score = db.Column(db.Integer, nullable=False)
    communication_score = db.Column(db.Integer, nullable=False)
    problem_solving_score = db.Column(db.Integer, nullable=False)
    cultural_fit_score = db.Column(db.Integer, nullable=False)
    overall_recommendation = db.Column(db.String(20), nullable=False)

    detailed_feedback = db.Column(db.Text)
    strengths = db.Column(db.JSON)
    areas_for_improvement = db.Column(db.JSON)
    follow_up_questions = db.Column(db.JSON)

    interviewer = db.relationship("User", lazy="joined")

    def to_dict(self):
        out = {
            "id": self.id,
            "interview_id": self.interview_id,
            "interviewer_id": self.interviewer_id,
            "overall_recommendation": self.overall_recommendation,
            "detailed_feedback": self.detailed_feedback,
            "strengths": self.strengths or [],
            "areas_for_improvement": self.areas_for_improvement or [],
            "follow_up_questions": self.follow_up_questions or [],
            "created_at": isoformat(self.created_at),
        }
        for name in FEEDBACK_SCORES:
            out[name] = getattr(self, name)
        if self.interviewer is not None:
            out["interviewer"] = {"name": self.interviewer.name, "email": self.interviewer.email}
        return out
