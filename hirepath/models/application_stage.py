from ..extensions import db
from .base import TimestampMixin, isoformat


class ApplicationStage(db.Model, TimestampMixin):
    __tablename__ = "application_stages"
    __table_args__ = (
        db.UniqueConstraint("application_id", "stage_name", name="uq_application_stages_app_stage"),
    )

    id = db.Column(db.Integer, primary_key=True)
    application_id = db.Column(db.Integer, db.ForeignKey("applications.id"), nullable=False, index=True)
    stage_name = db.Column(db.String(30), nullable=False)
    status = db.Column(db.String(20), nullable=False, default="pending")  # pending/in_progress/completed/failed
    score = db.Column(db.Float, nullable=False, default=0)
    feedback = db.Column(db.Text)
    completed_at = db.Column(db.DateTime)

    application = db.relationship("Application", back_populates="stages")

    def to_dict(self):
        return {
            "id": self.id,
            "application_id": self.application_id,
            "stage_name": self.stage_name,
            "status": self.status,
            "score": self.score,
            "feedback": self.feedback,
            "completed_at": isoformat(self.completed_at),
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }

    def __repr__(self) -> str:
        return f"<ApplicationStage application_id={self.application_id} {self.stage_name}={self.status}>"
