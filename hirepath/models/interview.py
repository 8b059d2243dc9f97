from ..extensions import db
from .base import TimestampMixin, isoformat

INTERVIEW_STATUSES = ("scheduled", "confirmed", "rescheduled", "cancelled", "completed")


class Interview(db.Model, TimestampMixin):
    __tablename__ = "interviews"

    id = db.Column(db.Integer, primary_key=True)
    application_id = db.Column(db.Integer, db.ForeignKey("applications.id"), nullable=False, index=True)

    stage = db.Column(db.String(30), nullable=False)  # one of the pipeline stages
    scheduled_date = db.Column(db.Date, nullable=False)
    scheduled_time = db.Column(db.Time, nullable=False)
    interviewer_id = db.Column(db.Integer, db.ForeignKey("users.id"))
    location = db.Column(db.String(255))
    meeting_link = db.Column(db.String(512))
    status = db.Column(db.String(20), nullable=False, default="scheduled")
    feedback = db.Column(db.Text)
    rating = db.Column(db.Integer)  # 1-5
    reminder_sent = db.Column(db.Boolean, nullable=False, default=False)

    def to_dict(self):
        return {
            "id": self.id,
            "application_id": self.application_id,
            "stage": self.stage,
            "scheduled_date": isoformat(self.scheduled_date),
            "scheduled_time": isoformat(self.scheduled_time),
            "interviewer_id": self.interviewer_id,
            "location": self.location,
            "meeting_link": self.meeting_link,
            "status": self.status,
            "feedback": self.feedback,
            "rating": self.rating,
            "reminder_sent": bool(self.reminder_sent),
        }

    def __repr__(self) -> str:
        return f"<Interview id={self.id} application_id={self.application_id} stage={self.stage}>"
