"""Stage tracker: the hiring pipeline of a single application.

Every application walks the same six stages in a fixed order. Each stage has
one row in ``application_stages``; completing a stage advances the derived
fields on the application (``current_stage``, ``progress_percentage`` and
``status``). The stage write and the application write are committed in a
single transaction.
"""
from datetime import datetime, timezone

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from ..errors import NotFoundError, PersistenceError, ValidationError
from ..extensions import db, rq
from ..models.application import Application
from ..models.application_stage import ApplicationStage

STAGE_ORDER = (
    "resume_upload",
    "aptitude_test",
    "group_discussion",
    "technical_test",
    "hr_round",
    "personality_test",
)

STAGE_LABELS = {
    "resume_upload": "Resume Upload",
    "aptitude_test": "Aptitude Test",
    "group_discussion": "Group Discussion",
    "technical_test": "Technical Test",
    "hr_round": "HR Round",
    "personality_test": "Personality Test",
}

STAGE_STATUSES = ("pending", "in_progress", "completed", "failed")

APPLICATION_STATUSES = (
    "applied",
    "aptitude_test",
    "group_discussion",
    "technical_test",
    "hr_round",
    "completed",
    "rejected",
)

COMPLETED = "completed"
FAILED = "failed"
REJECTED = "rejected"
INITIAL_STAGE = STAGE_ORDER[0]
INITIAL_STATUS = "applied"
INITIAL_PROGRESS = 10
QUALIFICATION_THRESHOLD = 75

# application status once the stage has been completed; resume_upload is
# deliberately absent and leaves the application at "applied"
STATUS_AFTER_STAGE = {
    "aptitude_test": "aptitude_test",
    "group_discussion": "group_discussion",
    "technical_test": "technical_test",
    "hr_round": "hr_round",
    "personality_test": "completed",
}


def _now():
    return datetime.now(timezone.utc)


def stage_position(stage_name):
    """Index of ``stage_name`` in the pipeline; ``completed`` sorts last."""
    if stage_name == COMPLETED:
        return len(STAGE_ORDER)
    try:
        return STAGE_ORDER.index(stage_name)
    except ValueError:
        return 0


def next_stage_after(stage_name):
    idx = STAGE_ORDER.index(stage_name)
    if idx + 1 < len(STAGE_ORDER):
        return STAGE_ORDER[idx + 1]
    return COMPLETED


def progress_for(stage_name):
    """Percentage of the pipeline done once ``stage_name`` is completed."""
    idx = STAGE_ORDER.index(stage_name)
    # half-up rounding, the way the dashboard has always displayed it
    return int(100 * (idx + 1) / len(STAGE_ORDER) + 0.5)


def ordered(stages):
    return sorted(stages, key=lambda s: (
        STAGE_ORDER.index(s.stage_name) if s.stage_name in STAGE_ORDER else len(STAGE_ORDER),
        s.id or 0,
    ))


def _validate_outcome(stage_name, status, score):
    if stage_name not in STAGE_ORDER:
        raise ValidationError(f"Unknown stage: {stage_name!r}", {"stage_name": list(STAGE_ORDER)})
    if status not in STAGE_STATUSES:
        raise ValidationError(f"Unknown stage status: {status!r}", {"status": list(STAGE_STATUSES)})
    if score is None:
        score = 0
    if isinstance(score, bool):
        raise ValidationError("Score must be a number")
    try:
        score = float(score)
    except (TypeError, ValueError):
        raise ValidationError("Score must be a number")
    if not 0 <= score <= 100:
        raise ValidationError(f"Score must be between 0 and 100, got {score:g}")
    return score


def _load_application(application_id):
    try:
        application = db.session.get(Application, application_id)
    except SQLAlchemyError as e:
        current_app.logger.exception("Loading application %s failed", application_id)
        raise PersistenceError("Failed to load application") from e
    if application is None:
        raise NotFoundError(f"Application {application_id} not found")
    return application


def initialize_stages(application):
    """Add the six pending stage rows for a new application (not committed)."""
    rows = [
        ApplicationStage(application=application, stage_name=name, status="pending", score=0)
        for name in STAGE_ORDER
    ]
    db.session.add_all(rows)
    return rows


def list_stages(application_id):
    try:
        rows = ApplicationStage.query.filter_by(application_id=application_id).all()
    except SQLAlchemyError as e:
        current_app.logger.exception("Fetching stages for application %s failed", application_id)
        raise PersistenceError("Failed to load application stages") from e
    return ordered(rows)


def sync_progress(application, completed_stage):
    """Advance the application's derived fields after ``completed_stage``.

    Returns False without touching the application when the stage is unknown
    or lies behind the application's current stage.
    """
    if completed_stage not in STAGE_ORDER:
        return False
    target = STAGE_ORDER.index(completed_stage) + 1
    if stage_position(application.current_stage) > target:
        current_app.logger.debug(
            "Application %s already at %s, not moving back for %s",
            application.id, application.current_stage, completed_stage,
        )
        return False
    _place_at(application, target)
    return True


def _place_at(application, position):
    """Set the derived fields for an application whose first ``position``
    stages are behind it."""
    if position <= 0:
        application.current_stage = INITIAL_STAGE
        application.progress_percentage = INITIAL_PROGRESS
        application.status = INITIAL_STATUS
        return
    last = STAGE_ORDER[min(position, len(STAGE_ORDER)) - 1]
    application.current_stage = next_stage_after(last)
    application.progress_percentage = progress_for(last)
    application.status = STATUS_AFTER_STAGE.get(last, INITIAL_STATUS)


def ensure_stage_open(application, stage_name, status):
    """Refuse outcomes for stages the application has not reached yet, and
    refuse to move a completed stage to any other status."""
    if stage_name not in STAGE_ORDER:
        return
    reached = stage_position(application.current_stage)
    if STAGE_ORDER.index(stage_name) > reached:
        raise ValidationError(
            f"Stage {stage_name} is locked until {application.current_stage} is completed",
            {"current_stage": application.current_stage},
        )
    if status != COMPLETED:
        row = ApplicationStage.query.filter_by(application_id=application.id, stage_name=stage_name).first()
        if row is not None and row.status == COMPLETED:
            raise ValidationError(f"Stage {stage_name} is already completed")


def _apply_outcome(application, stage_name, status, score, feedback):
    if application.status == REJECTED:
        raise ValidationError(f"Application {application.id} has been rejected")

    stage = ApplicationStage.query.filter_by(application_id=application.id, stage_name=stage_name).first()
    if stage is None:
        stage = ApplicationStage(application_id=application.id, stage_name=stage_name)
        db.session.add(stage)
    # feedback belongs to an outcome; a new status without feedback drops the old text
    if feedback is not None or stage.status != status:
        stage.feedback = feedback
    stage.status = status
    stage.score = score
    stage.completed_at = _now() if status == COMPLETED else None

    synced = False
    if status == COMPLETED:
        synced = sync_progress(application, stage_name)
    return stage, synced


def _commit(action, application_id):
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.exception("%s for application %s failed", action, application_id)
        raise PersistenceError(f"Failed to {action.lower()}") from e


def _notify(application, stage):
    if stage.status not in (COMPLETED, FAILED):
        return
    from ..jobs.notify import notify_stage_outcome
    rq.enqueue(notify_stage_outcome, application.id, stage.stage_name, stage.status, stage.score)


def record_stage_outcome(application_id, stage_name, status, score=0, feedback=None):
    """Upsert the outcome of one stage and, on completion, sync progress."""
    score = _validate_outcome(stage_name, status, score)
    application = _load_application(application_id)
    try:
        stage, synced = _apply_outcome(application, stage_name, status, score, feedback)
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.exception("Upserting stage %s for application %s failed", stage_name, application_id)
        raise PersistenceError("Failed to record stage outcome") from e
    _commit("Record stage outcome", application_id)

    current_app.logger.info(
        "Application %s stage %s -> %s (score=%s)%s",
        application.id, stage_name, status, score,
        f"; now at {application.current_stage} {application.progress_percentage}%" if synced else "",
    )
    _notify(application, stage)
    return stage


def qualification_message(score):
    if score >= QUALIFICATION_THRESHOLD:
        return f"Qualification score {score:g}% meets the {QUALIFICATION_THRESHOLD}% requirement."
    return f"Qualification score {score:g}% is below the {QUALIFICATION_THRESHOLD}% requirement."


def complete_resume_upload(application_id, resume_url, qualification_score, summary):
    """Evaluate the resume stage through the qualification gate."""
    score = _validate_outcome(STAGE_ORDER[0], COMPLETED, qualification_score)
    status = COMPLETED if score >= QUALIFICATION_THRESHOLD else FAILED
    application = _load_application(application_id)
    try:
        stage, _ = _apply_outcome(application, "resume_upload", status, score, qualification_message(score))
        application.resume_url = resume_url
        application.resume_summary = summary
        application.qualification_score = score
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.exception("Resume stage for application %s failed", application_id)
        raise PersistenceError("Failed to record resume upload") from e
    _commit("Record resume upload", application_id)

    if status == FAILED:
        current_app.logger.warning(
            "Application %s resume scored %s, below threshold %s",
            application.id, score, QUALIFICATION_THRESHOLD,
        )
    else:
        current_app.logger.info("Application %s resume passed with %s", application.id, score)
    _notify(application, stage)
    return stage


def recompute_progress(application_id):
    """Rebuild the derived fields from the stored stage rows.

    Follows the same rule as ``sync_progress``: the application sits after
    its furthest completed stage and never moves back. Safe to run any number
    of times. Rejected applications are left alone.
    """
    application = _load_application(application_id)
    if application.status == REJECTED:
        return application

    reached = [stage_position(application.current_stage)]
    reached += [STAGE_ORDER.index(s.stage_name) + 1 for s in list_stages(application.id)
                if s.status == COMPLETED and s.stage_name in STAGE_ORDER]
    _place_at(application, max(reached))
    _commit("Recompute progress", application.id)
    current_app.logger.info(
        "Application %s recomputed: %s %s%% (%s)",
        application.id, application.current_stage, application.progress_percentage, application.status,
    )
    return application
