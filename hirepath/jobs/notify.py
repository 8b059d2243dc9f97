from datetime import datetime, timezone

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from ..extensions import db
from ..models.application import Application
from ..models.interview import Interview
from ..models.notification import Notification
from ..services.mail import mail_enabled, send_mail
from ..services.stage_tracker import COMPLETED, STAGE_LABELS


def _commit(action):
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception('%s failed', action)
        return False
    return True


def _deliver(application, type_, title, message):
    n = Notification(user_id=application.user_id, related_application_id=application.id,
                     type=type_, title=title, message=message)
    db.session.add(n)
    if not _commit(f'Saving {type_} notification for application {application.id}'):
        return None

    to_email = application.candidate.email if application.candidate else None
    if not (mail_enabled() and to_email):
        return n.id
    try:
        _, message_id = send_mail(to_email, title, f"<p>{message}</p>")
    except Exception:
        current_app.logger.exception('Sending notification %s to %s failed', n.id, to_email)
        return n.id
    n.sent_to = to_email
    n.provider_message_id = message_id
    n.sent_at = datetime.now(timezone.utc)
    _commit(f'Recording delivery of notification {n.id}')
    return n.id


def notify_stage_outcome(application_id: int, stage_name: str, status: str, score: float):
    application = db.session.get(Application, application_id)
    if application is None:
        return None
    label = STAGE_LABELS.get(stage_name, stage_name)
    job_title = application.job.title if application.job else "your application"
    if status == COMPLETED:
        title = f"{label} completed"
        message = f"You completed the {label} stage for {job_title} with a score of {score:g}."
        type_ = "stage_completed"
    else:
        title = f"{label} not passed"
        message = f"Your {label} stage for {job_title} was not passed (score {score:g})."
        type_ = "stage_failed"
    return _deliver(application, type_, title, message)


def notify_status_override(application_id: int, old_status: str, new_status: str):
    application = db.session.get(Application, application_id)
    if application is None:
        return None
    job_title = application.job.title if application.job else "your application"
    title = "Application status updated"
    message = (f"Your application for {job_title} moved from "
               f"{(old_status or 'none').replace('_', ' ')} to {new_status.replace('_', ' ')}.")
    return _deliver(application, "status_override", title, message)


def notify_interview_reminder(interview_id: int):
    interview = db.session.get(Interview, interview_id)
    if interview is None or interview.reminder_sent:
        return None
    application = db.session.get(Application, interview.application_id)
    if application is None:
        return None
    label = STAGE_LABELS.get(interview.stage, interview.stage)
    job_title = application.job.title if application.job else "your application"
    where = interview.meeting_link or interview.location
    message = (f"Reminder: your {label} interview for {job_title} is on "
               f"{interview.scheduled_date:%Y-%m-%d} at {interview.scheduled_time:%H:%M}.")
    if where:
        message += f" Join at {where}."
    notification_id = _deliver(application, "interview_reminder", f"{label} interview reminder", message)
    if notification_id is None:
        return None
    interview.reminder_sent = True
    _commit(f'Flagging reminder for interview {interview.id}')
    return notification_id
