from flask import abort, jsonify
from flask_login import login_required, current_user

from . import bp
from .forms import ApplyForm, JobForm
from ...services import analytics
from ...services.applications import apply_to_job
from ...services.jobs import create_job, get_job, list_active_jobs
from ...utils.decorators import hr_required
from ...utils.forms import validate_or_raise


@bp.get("")
def list_jobs():
    return jsonify([j.to_dict() for j in list_active_jobs()])


@bp.post("")
@hr_required
def post_job():
    form = validate_or_raise(JobForm())
    job = create_job(
        current_user.id,
        title=form.title.data,
        company=form.company.data,
        description=form.description.data,
        location=form.location.data,
        job_type=form.job_type.data,
        experience_level=form.experience_level.data,
        salary_min=form.salary_min.data,
        salary_max=form.salary_max.data,
        required_skills=form.required_skills.data or None,
        application_deadline=form.application_deadline.data,
    )
    return jsonify(job.to_dict()), 201


@bp.get("/<int:job_id>")
def job_detail(job_id):
    return jsonify(get_job(job_id).to_dict())


@bp.post("/<int:job_id>/apply")
@login_required
def apply(job_id):
    if current_user.is_hr:
        abort(403)
    form = validate_or_raise(ApplyForm())
    application = apply_to_job(job_id, current_user.id, form.cover_letter.data)
    return jsonify(application.to_dict(include_stages=True)), 201


@bp.get("/<int:job_id>/metrics")
@hr_required
def job_metrics(job_id):
    return jsonify(analytics.job_performance(job_id))
