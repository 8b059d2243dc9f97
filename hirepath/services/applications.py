from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from ..errors import NotFoundError, PersistenceError, ValidationError
from ..extensions import db, rq
from ..models.application import Application
from ..models.job import Job
from ..models.status_override import StatusOverride
from .stage_tracker import (
    APPLICATION_STATUSES,
    INITIAL_PROGRESS,
    INITIAL_STAGE,
    INITIAL_STATUS,
    STATUS_AFTER_STAGE,
    initialize_stages,
)

# Progress shown for a status set by hand. This is the HR table, not the
# stage tracker's arithmetic; the two disagree until the next resync.
PROGRESS_BY_STATUS = {
    INITIAL_STATUS: INITIAL_PROGRESS,
    STATUS_AFTER_STAGE["aptitude_test"]: 25,
    STATUS_AFTER_STAGE["group_discussion"]: 50,
    STATUS_AFTER_STAGE["technical_test"]: 75,
    STATUS_AFTER_STAGE["hr_round"]: 90,
    STATUS_AFTER_STAGE["personality_test"]: 100,
    "rejected": 0,
}


def get_application(application_id):
    application = db.session.get(Application, application_id)
    if application is None:
        raise NotFoundError(f"Application {application_id} not found")
    return application


def apply_to_job(job_id, user_id, cover_letter=None):
    job = db.session.get(Job, job_id)
    if job is None or not job.is_active:
        raise NotFoundError(f"Job {job_id} is not open for applications")

    existing = Application.query.filter_by(job_id=job_id, user_id=user_id).first()
    if existing:
        raise ValidationError("You have already applied to this job")

    application = Application(
        job_id=job_id,
        user_id=user_id,
        status=INITIAL_STATUS,
        current_stage=INITIAL_STAGE,
        progress_percentage=INITIAL_PROGRESS,
        cover_letter=cover_letter or None,
    )
    db.session.add(application)
    initialize_stages(application)
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.exception("Applying user %s to job %s failed", user_id, job_id)
        raise PersistenceError("Failed to create application") from e
    current_app.logger.info("User %s applied to job %s (application %s)", user_id, job_id, application.id)
    return application


def list_user_applications(user_id):
    return (
        Application.query.filter_by(user_id=user_id)
        .order_by(Application.applied_date.desc(), Application.id.desc())
        .all()
    )


def list_applications_for_hr(status=None, job_id=None):
    query = Application.query
    if status:
        query = query.filter(Application.status == status)
    if job_id:
        query = query.filter(Application.job_id == job_id)
    return query.order_by(Application.applied_date.desc(), Application.id.desc()).all()


def override_status(application_id, status, actor_id, reason=None):
    """Manually set an application's status, logging the change.

    The stage tracker stays authoritative: ``recompute_progress`` puts the
    derived fields back in line with the stage rows.
    """
    if status not in APPLICATION_STATUSES:
        raise ValidationError(f"Unknown application status: {status!r}", {"status": list(APPLICATION_STATUSES)})
    application = get_application(application_id)

    event = StatusOverride(
        application_id=application.id,
        actor_id=actor_id,
        old_status=application.status,
        new_status=status,
        old_progress=application.progress_percentage,
        new_progress=PROGRESS_BY_STATUS[status],
        reason=reason or None,
    )
    application.status = status
    application.progress_percentage = PROGRESS_BY_STATUS[status]
    db.session.add(event)
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.exception("Status override on application %s failed", application_id)
        raise PersistenceError("Failed to update application status") from e

    current_app.logger.info(
        "HR user %s overrode application %s: %s -> %s",
        actor_id, application.id, event.old_status, event.new_status,
    )
    from ..jobs.notify import notify_status_override
    rq.enqueue(notify_status_override, application.id, event.old_status, event.new_status)
    return application


def list_overrides(application_id):
    get_application(application_id)
    return (
        StatusOverride.query.filter_by(application_id=application_id)
        .order_by(StatusOverride.created_at.asc(), StatusOverride.id.asc())
        .all()
    )
