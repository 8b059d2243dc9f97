from io import BytesIO

from flask import abort, jsonify, request, send_file
from flask_login import login_required, current_user

from . import bp
from .forms import InterviewFeedbackForm, InterviewForm, InterviewStatusForm
from ...services import interviews as interview_service
from ...services.applications import get_application
from ...utils.decorators import ensure_can_access, hr_required
from ...utils.forms import validate_or_raise


@bp.get("")
@login_required
def list_interviews():
    application_id = request.args.get("application_id", type=int)
    if application_id:
        ensure_can_access(get_application(application_id))
    elif not current_user.is_hr:
        abort(403)
    return jsonify([i.to_dict() for i in interview_service.list_interviews(application_id)])


@bp.get("/upcoming")
@hr_required
def upcoming():
    limit = request.args.get("limit", default=10, type=int)
    return jsonify([i.to_dict() for i in interview_service.upcoming_interviews(limit=limit)])


@bp.post("")
@hr_required
def schedule():
    form = validate_or_raise(InterviewForm())
    interview = interview_service.schedule_interview(
        form.application_id.data,
        stage=form.stage.data,
        scheduled_date=form.scheduled_date.data,
        scheduled_time=form.scheduled_time.data,
        interviewer_id=form.interviewer_id.data or current_user.id,
        location=form.location.data,
        meeting_link=form.meeting_link.data,
    )
    return jsonify(interview.to_dict()), 201


@bp.post("/<int:interview_id>/status")
@hr_required
def update_status(interview_id):
    form = validate_or_raise(InterviewStatusForm())
    interview = interview_service.update_interview_status(
        interview_id, form.status.data,
        feedback=form.feedback.data or None,
        rating=form.rating.data,
    )
    return jsonify(interview.to_dict())


@bp.get("/<int:interview_id>/ics")
@login_required
def download_ics(interview_id):
    interview = interview_service.get_interview(interview_id)
    ensure_can_access(get_application(interview.application_id))
    ics = interview_service.interview_ics(interview)
    return send_file(BytesIO(ics.encode('utf-8')), as_attachment=True,
                     download_name=f"interview_{interview.id}.ics", mimetype="text/calendar")


@bp.post("/<int:interview_id>/feedback")
@hr_required
def submit_feedback(interview_id):
    form = validate_or_raise(InterviewFeedbackForm())
    feedback = interview_service.submit_interview_feedback(
        interview_id, current_user.id,
        overall_recommendation=form.overall_recommendation.data,
        detailed_feedback=form.detailed_feedback.data,
        strengths=form.strengths.data,
        areas_for_improvement=form.areas_for_improvement.data,
        follow_up_questions=form.follow_up_questions.data,
        technical_score=form.technical_score.data,
        communication_score=form.communication_score.data,
        problem_solving_score=form.problem_solving_score.data,
        cultural_fit_score=form.cultural_fit_score.data,
    )
    return jsonify(feedback.to_dict()), 201


@bp.get("/<int:interview_id>/feedback")
@hr_required
def feedback(interview_id):
    return jsonify([f.to_dict() for f in interview_service.get_interview_feedback(interview_id)])


@bp.post("/<int:interview_id>/reminder")
@hr_required
def send_reminder(interview_id):
    interview = interview_service.send_interview_reminder(interview_id)
    return jsonify(interview.to_dict()), 202
