from ..extensions import db
from .base import isoformat


class StatusOverride(db.Model):
    """Audit row for a manual HR change of an application's status."""
    __tablename__ = "status_overrides"

    id = db.Column(db.Integer, primary_key=True)
    application_id = db.Column(db.Integer, db.ForeignKey("applications.id"), nullable=False, index=True)
    actor_id = db.Column(db.Integer, db.ForeignKey("users.id"))
    old_status = db.Column(db.String(30))
    new_status = db.Column(db.String(30), nullable=False)
    old_progress = db.Column(db.Integer)
    new_progress = db.Column(db.Integer)
    reason = db.Column(db.Text)
    created_at = db.Column(db.DateTime, server_default=db.func.now(), nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "application_id": self.application_id,
            "actor_id": self.actor_id,
            "old_status": self.old_status,
            "new_status": self.new_status,
            "old_progress": self.old_progress,
            "new_progress": self.new_progress,
            "reason": self.reason,
            "created_at": isoformat(self.created_at),
        }
