from datetime import date, datetime, timedelta

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from ..errors import NotFoundError, PersistenceError, ValidationError
from ..extensions import db, rq
from ..models.interview import Interview, INTERVIEW_STATUSES
from ..models.interview_feedback import FEEDBACK_SCORES, RECOMMENDATIONS, InterviewFeedback
from .applications import get_application
from .ics import build_ics
from .stage_tracker import STAGE_LABELS, STAGE_ORDER

INTERVIEW_DURATION = timedelta(hours=1)
REMINDER_WINDOW = timedelta(hours=24)
REMINDABLE_STATUSES = ("scheduled", "confirmed", "rescheduled")


def _commit(action):
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.exception("%s failed", action)
        raise PersistenceError(f"Failed to {action.lower()}") from e


def schedule_interview(application_id, stage, scheduled_date, scheduled_time,
                       interviewer_id=None, location=None, meeting_link=None):
    missing = [name for name, value in (("stage", stage), ("scheduled_date", scheduled_date),
                                        ("scheduled_time", scheduled_time)) if not value]
    if missing:
        raise ValidationError("Please select a stage and a time slot",
                              {k: ["This field is required."] for k in missing})
    if stage not in STAGE_ORDER:
        raise ValidationError(f"Unknown stage: {stage!r}", {"stage": list(STAGE_ORDER)})

    application = get_application(application_id)
    interview = Interview(
        application_id=application.id,
        stage=stage,
        scheduled_date=scheduled_date,
        scheduled_time=scheduled_time,
        interviewer_id=interviewer_id,
        location=location or None,
        meeting_link=meeting_link or None,
        status="scheduled",
    )
    db.session.add(interview)
    application.next_interview_date = scheduled_date
    application.next_interview_time = scheduled_time
    application.next_interview_stage = stage
    _commit("Schedule interview")
    current_app.logger.info(
        "Interview %s scheduled for application %s (%s on %s %s)",
        interview.id, application.id, stage, scheduled_date, scheduled_time,
    )
    return interview


def get_interview(interview_id):
    interview = db.session.get(Interview, interview_id)
    if interview is None:
        raise NotFoundError(f"Interview {interview_id} not found")
    return interview


def update_interview_status(interview_id, status, feedback=None, rating=None):
    if status not in INTERVIEW_STATUSES:
        raise ValidationError(f"Unknown interview status: {status!r}", {"status": list(INTERVIEW_STATUSES)})
    if rating is not None and not 1 <= rating <= 5:
        raise ValidationError("Rating must be between 1 and 5")
    interview = get_interview(interview_id)
    interview.status = status
    if feedback is not None:
        interview.feedback = feedback
    if rating is not None:
        interview.rating = rating
    _commit("Update interview status")
    current_app.logger.info("Interview %s -> %s", interview.id, status)
    return interview


def list_interviews(application_id=None):
    query = Interview.query
    if application_id:
        query = query.filter(Interview.application_id == application_id)
    return query.order_by(Interview.scheduled_date.asc(), Interview.scheduled_time.asc()).all()


def upcoming_interviews(limit=10, today=None):
    today = today or date.today()
    return (
        Interview.query
        .filter(Interview.scheduled_date >= today)
        .filter(Interview.status.in_(("scheduled", "confirmed")))
        .order_by(Interview.scheduled_date.asc(), Interview.scheduled_time.asc())
        .limit(limit)
        .all()
    )


def interview_ics(interview):
    start = datetime.combine(interview.scheduled_date, interview.scheduled_time)
    return build_ics(
        current_app.config['UID_DOMAIN'],
        title=f"{STAGE_LABELS.get(interview.stage, interview.stage)} interview #{interview.id}",
        start=start,
        end=start + INTERVIEW_DURATION,
        location=interview.location or "",
        description=interview.meeting_link or "",
    )


def _feedback_score(name, value):
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{name} is required", {name: ["This field is required."]})
    try:
        value = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be a whole number")
    if not 0 <= value <= 100:
        raise ValidationError(f"{name} must be between 0 and 100")
    return value


def submit_interview_feedback(interview_id, interviewer_id, overall_recommendation, detailed_feedback=None,
                              strengths=None, areas_for_improvement=None, follow_up_questions=None, **scores):
    """Store one interviewer's scored feedback; a second submission replaces the first."""
    if overall_recommendation not in RECOMMENDATIONS:
        raise ValidationError("Please select an overall recommendation",
                              {"overall_recommendation": list(RECOMMENDATIONS)})
    unknown = set(scores) - set(FEEDBACK_SCORES)
    if unknown:
        raise ValidationError(f"Unknown feedback fields: {', '.join(sorted(unknown))}")
    values = {name: _feedback_score(name, scores.get(name)) for name in FEEDBACK_SCORES}
    interview = get_interview(interview_id)

    feedback = InterviewFeedback.query.filter_by(interview_id=interview.id, interviewer_id=interviewer_id).first()
    if feedback is None:
        feedback = InterviewFeedback(interview_id=interview.id, interviewer_id=interviewer_id)
        db.session.add(feedback)
    for name, value in values.items():
        setattr(feedback, name, value)
    feedback.overall_recommendation = overall_recommendation
    feedback.detailed_feedback = detailed_feedback or None
    feedback.strengths = list(strengths or [])
    feedback.areas_for_improvement = list(areas_for_improvement or [])
    feedback.follow_up_questions = list(follow_up_questions or [])
    _commit("Submit interview feedback")
    current_app.logger.info(
        "Interviewer %s submitted feedback for interview %s: %s",
        interviewer_id, interview.id, overall_recommendation,
    )
    return feedback


def get_interview_feedback(interview_id):
    interview = get_interview(interview_id)
    return InterviewFeedback.query.filter_by(interview_id=interview.id).order_by(InterviewFeedback.id.asc()).all()


def send_interview_reminder(interview_id):
    """Queue the reminder for an upcoming interview.

    The job flags ``reminder_sent`` once the candidate has been notified.
    """
    interview = get_interview(interview_id)
    if interview.status not in REMINDABLE_STATUSES:
        raise ValidationError(f"Interview {interview.id} is {interview.status}, no reminder sent")
    from ..jobs.notify import notify_interview_reminder
    rq.enqueue(notify_interview_reminder, interview.id)
    current_app.logger.info("Reminder queued for interview %s", interview.id)
    return interview


def send_due_reminders(within=REMINDER_WINDOW, now=None):
    """Queue reminders for interviews starting within ``within`` that have none yet."""
    now = now or datetime.now()
    horizon = now + within
    candidates = (
        Interview.query
        .filter(Interview.reminder_sent.is_(False))
        .filter(Interview.status.in_(REMINDABLE_STATUSES))
        .filter(Interview.scheduled_date >= now.date(), Interview.scheduled_date <= horizon.date())
        .order_by(Interview.scheduled_date.asc(), Interview.scheduled_time.asc())
        .all()
    )
    queued = []
    for interview in candidates:
        start = datetime.combine(interview.scheduled_date, interview.scheduled_time)
        if now <= start <= horizon:
            send_interview_reminder(interview.id)
            queued.append(interview.id)
    return queued
