from flask import jsonify, request
from flask_login import current_user

from . import bp
from .forms import StatusOverrideForm
from ...services import analytics, stage_tracker
from ...services.applications import list_applications_for_hr, list_overrides, override_status
from ...utils.decorators import hr_required
from ...utils.forms import validate_or_raise


@bp.get("/applications")
@hr_required
def applications():
    status = request.args.get("status")
    job_id = request.args.get("job_id", type=int)
    items = list_applications_for_hr(status=status, job_id=job_id)
    out = []
    for a in items:
        row = a.to_dict()
        if a.candidate is not None:
            row["candidate"] = {
                "name": a.candidate.name,
                "email": a.candidate.email,
                "skills": a.candidate.skills or [],
                "experience_years": a.candidate.experience_years,
            }
        out.append(row)
    return jsonify(out)


@bp.post("/applications/<int:application_id>/status")
@hr_required
def set_status(application_id):
    form = validate_or_raise(StatusOverrideForm())
    application = override_status(application_id, form.status.data, current_user.id, form.reason.data)
    return jsonify(application.to_dict())


@bp.get("/applications/<int:application_id>/overrides")
@hr_required
def overrides(application_id):
    return jsonify([o.to_dict() for o in list_overrides(application_id)])


@bp.post("/applications/<int:application_id>/resync")
@hr_required
def resync(application_id):
    application = stage_tracker.recompute_progress(application_id)
    return jsonify(application.to_dict(include_stages=True))


@bp.get("/analytics/stages")
@hr_required
def stage_analytics():
    job_id = request.args.get("job_id", type=int)
    return jsonify(analytics.stage_funnel(job_id))


@bp.get("/analytics/candidates")
@hr_required
def candidate_analytics():
    return jsonify(analytics.candidate_analytics())


@bp.get("/analytics/interviews")
@hr_required
def interview_analytics():
    return jsonify(analytics.interview_analytics())
