from ..extensions import db
from .base import TimestampMixin, isoformat

JOB_TYPES = ("full_time", "part_time", "contract", "internship")
EXPERIENCE_LEVELS = ("entry", "mid", "senior", "lead")


class Job(db.Model, TimestampMixin):
    __tablename__ = "jobs"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    company = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=False)
    location = db.Column(db.String(200), nullable=False)
    job_type = db.Column(db.String(20), nullable=False, default="full_time")
    experience_level = db.Column(db.String(20), nullable=False, default="entry")
    salary_min = db.Column(db.Integer)
    salary_max = db.Column(db.Integer)
    required_skills = db.Column(db.JSON)
    is_active = db.Column(db.Boolean, nullable=False, default=True, index=True)
    posted_by = db.Column(db.Integer, db.ForeignKey("users.id"))
    posted_date = db.Column(db.DateTime, server_default=db.func.now())
    application_deadline = db.Column(db.Date)

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "company": self.company,
            "description": self.description,
            "location": self.location,
            "job_type": self.job_type,
            "experience_level": self.experience_level,
            "salary_min": self.salary_min,
            "salary_max": self.salary_max,
            "required_skills": self.required_skills or [],
            "is_active": self.is_active,
            "posted_by": self.posted_by,
            "posted_date": isoformat(self.posted_date),
            "application_deadline": isoformat(self.application_deadline),
        }

    def __repr__(self) -> str:
        return f"<Job id={self.id} title={self.title!r}>"
