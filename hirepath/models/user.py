from ..extensions import db
from flask_login import UserMixin
from .base import TimestampMixin, isoformat
from werkzeug.security import generate_password_hash, check_password_hash

ROLES = ("candidate", "hr")


class User(db.Model, UserMixin, TimestampMixin):
    __tablename__ = "users"
    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    name = db.Column(db.String(120))
    role = db.Column(db.String(20), nullable=False, default="candidate")  # candidate/hr
    company = db.Column(db.String(200))  # hr only
    skills = db.Column(db.JSON)          # ["Python","SQL"]
    experience_years = db.Column(db.Integer)

    def set_password(self, raw):
        self.password_hash = generate_password_hash(raw)

    def check_password(self, raw):
        return check_password_hash(self.password_hash, raw)

    @property
    def is_hr(self):
        return self.role == "hr"

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "role": self.role,
            "company": self.company,
            "skills": self.skills or [],
            "experience_years": self.experience_years,
            "created_at": isoformat(self.created_at),
        }

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r} role={self.role}>"
