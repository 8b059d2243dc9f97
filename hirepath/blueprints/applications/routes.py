from flask import jsonify, request
from flask_login import login_required, current_user

from . import bp
from .forms import ResumeForm, StageOutcomeForm
from ...errors import ValidationError
from ...services import stage_tracker
from ...services.applications import get_application, list_user_applications
from ...services.resume_analysis import calculate_qualification_score, decode_resume, summarize_resume
from ...services.storage import save_file
from ...utils.decorators import ensure_can_access
from ...utils.forms import validate_or_raise


@bp.get("")
@login_required
def my_applications():
    return jsonify([a.to_dict() for a in list_user_applications(current_user.id)])


@bp.get("/<int:application_id>")
@login_required
def detail(application_id):
    application = ensure_can_access(get_application(application_id))
    return jsonify(application.to_dict(include_stages=True))


@bp.get("/<int:application_id>/stages")
@login_required
def stages(application_id):
    ensure_can_access(get_application(application_id))
    return jsonify([s.to_dict() for s in stage_tracker.list_stages(application_id)])


@bp.post("/<int:application_id>/stages/<stage_name>")
@login_required
def record_stage(application_id, stage_name):
    application = ensure_can_access(get_application(application_id))
    if stage_name == stage_tracker.INITIAL_STAGE:
        raise ValidationError("The resume stage is evaluated through the resume upload")
    form = validate_or_raise(StageOutcomeForm())
    stage_tracker.ensure_stage_open(application, stage_name, form.status.data)
    stage = stage_tracker.record_stage_outcome(
        application.id, stage_name,
        status=form.status.data,
        score=form.score.data,
        feedback=form.feedback.data or None,
    )
    return jsonify({"stage": stage.to_dict(), "application": application.to_dict()})


@bp.post("/<int:application_id>/resume")
@login_required
def upload_resume(application_id):
    application = ensure_can_access(get_application(application_id))
    form = validate_or_raise(ResumeForm())

    resume_url = form.resume_url.data or None
    text = form.resume_text.data or ""
    f = request.files.get(form.resume.name)
    if f and getattr(f, 'filename', ''):
        resume_url = save_file(f, prefix=f"user{application.user_id}/application{application.id}")
        f.stream.seek(0)
        text = text or decode_resume(f.stream.read())
    if not text.strip():
        raise ValidationError("Upload a resume file or paste the resume text")

    score = calculate_qualification_score(text)
    passed = score >= stage_tracker.QUALIFICATION_THRESHOLD
    stage_tracker.ensure_stage_open(
        application, stage_tracker.INITIAL_STAGE, stage_tracker.COMPLETED if passed else stage_tracker.FAILED,
    )
    summary = summarize_resume(text)
    stage = stage_tracker.complete_resume_upload(application.id, resume_url, score, summary)
    return jsonify({
        "passed": stage.status == stage_tracker.COMPLETED,
        "threshold": stage_tracker.QUALIFICATION_THRESHOLD,
        "stage": stage.to_dict(),
        "application": application.to_dict(),
    })
