from ..extensions import db


class TimestampMixin:
    created_at = db.Column(db.DateTime, server_default=db.func.now())
    updated_at = db.Column(db.DateTime, server_default=db.func.now(), onupdate=db.func.now())


def isoformat(value):
    return value.isoformat() if value is not None else None
