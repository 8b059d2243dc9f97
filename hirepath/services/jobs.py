from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from ..errors import NotFoundError, PersistenceError, ValidationError
from ..extensions import db
from ..models.job import Job, JOB_TYPES, EXPERIENCE_LEVELS

JOB_FIELDS = (
    "title", "company", "description", "location", "job_type", "experience_level",
    "salary_min", "salary_max", "required_skills", "application_deadline",
)


def list_active_jobs():
    return Job.query.filter_by(is_active=True).order_by(Job.posted_date.desc(), Job.id.desc()).all()


def get_job(job_id):
    job = db.session.get(Job, job_id)
    if job is None:
        raise NotFoundError(f"Job {job_id} not found")
    return job


def create_job(posted_by, **fields):
    unknown = set(fields) - set(JOB_FIELDS)
    if unknown:
        raise ValidationError(f"Unknown job fields: {', '.join(sorted(unknown))}")
    missing = [k for k in ("title", "company", "description", "location") if not fields.get(k)]
    if missing:
        raise ValidationError("Missing required fields", {k: ["This field is required."] for k in missing})
    if fields.get("job_type") and fields["job_type"] not in JOB_TYPES:
        raise ValidationError(f"Unknown job type: {fields['job_type']!r}")
    if fields.get("experience_level") and fields["experience_level"] not in EXPERIENCE_LEVELS:
        raise ValidationError(f"Unknown experience level: {fields['experience_level']!r}")
    lo, hi = fields.get("salary_min"), fields.get("salary_max")
    if lo is not None and hi is not None and lo > hi:
        raise ValidationError("salary_min must not exceed salary_max")

    job = Job(posted_by=posted_by, **{k: v for k, v in fields.items() if v is not None})
    db.session.add(job)
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.exception("Creating job %r failed", fields.get("title"))
        raise PersistenceError("Failed to create job") from e
    current_app.logger.info("Job %s created by user %s", job.id, posted_by)
    return job
