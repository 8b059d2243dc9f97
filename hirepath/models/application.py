from ..extensions import db
from .base import TimestampMixin, isoformat


class Application(db.Model, TimestampMixin):
    """One candidate applying to one job.

    ``status``, ``current_stage`` and ``progress_percentage`` are derived from
    the application's stage rows by the stage tracker; HR overrides write the
    same fields and are logged in ``status_overrides``.
    """
    __tablename__ = "applications"
    __table_args__ = (
        db.UniqueConstraint("job_id", "user_id", name="uq_applications_job_user"),
    )

    id = db.Column(db.Integer, primary_key=True)
    job_id = db.Column(db.Integer, db.ForeignKey("jobs.id"), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)

    status = db.Column(db.String(30), nullable=False, default="applied", index=True)
    current_stage = db.Column(db.String(30), nullable=False, default="resume_upload")
    progress_percentage = db.Column(db.Integer, nullable=False, default=10)

    # set when the resume_upload stage is evaluated
    qualification_score = db.Column(db.Float)
    resume_summary = db.Column(db.Text)
    resume_url = db.Column(db.String(512))

    cover_letter = db.Column(db.Text)
    notes = db.Column(db.Text)
    applied_date = db.Column(db.DateTime, server_default=db.func.now())

    next_interview_date = db.Column(db.Date)
    next_interview_time = db.Column(db.Time)
    next_interview_stage = db.Column(db.String(30))

    job = db.relationship("Job", lazy="joined")
    candidate = db.relationship("User", lazy="joined")
    stages = db.relationship("ApplicationStage", back_populates="application", lazy="select")

    def to_dict(self, include_stages=False):
        out = {
            "id": self.id,
            "job_id": self.job_id,
            "user_id": self.user_id,
            "status": self.status,
            "current_stage": self.current_stage,
            "progress_percentage": self.progress_percentage,
            "qualification_score": self.qualification_score,
            "resume_summary": self.resume_summary,
            "resume_url": self.resume_url,
            "cover_letter": self.cover_letter,
            "notes": self.notes,
            "applied_date": isoformat(self.applied_date),
            "next_interview_date": isoformat(self.next_interview_date),
            "next_interview_time": isoformat(self.next_interview_time),
            "next_interview_stage": self.next_interview_stage,
            "updated_at": isoformat(self.updated_at),
        }
        if self.job is not None:
            out["job"] = {"title": self.job.title, "company": self.job.company, "location": self.job.location}
        if include_stages:
            from ..services.stage_tracker import ordered
            out["stages"] = [s.to_dict() for s in ordered(self.stages)]
        return out

    def __repr__(self) -> str:
        return f"<Application id={self.id} status={self.status} stage={self.current_stage}>"
