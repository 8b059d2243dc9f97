from ..extensions import db
from .base import TimestampMixin, isoformat


class Notification(db.Model, TimestampMixin):
    __tablename__ = "notifications"
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    related_application_id = db.Column(db.Integer, db.ForeignKey("applications.id"))
    type = db.Column(db.String(50))  # stage_completed/stage_failed/status_override
    title = db.Column(db.String(255), nullable=False)
    message = db.Column(db.Text, nullable=False)
    is_read = db.Column(db.Boolean, nullable=False, default=False)
    # email delivery, when SendGrid is configured
    sent_to = db.Column(db.String(255))
    provider_message_id = db.Column(db.String(255))
    sent_at = db.Column(db.DateTime)

    def to_dict(self):
        return {
            "id": self.id,
            "type": self.type,
            "title": self.title,
            "message": self.message,
            "is_read": self.is_read,
            "related_application_id": self.related_application_id,
            "sent_at": isoformat(self.sent_at),
            "created_at": isoformat(self.created_at),
        }
