from collections import Counter
from datetime import date

from sqlalchemy import func

from ..extensions import db
from ..models.application import Application
from ..models.application_stage import ApplicationStage
from ..models.interview import Interview
from ..models.interview_feedback import FEEDBACK_SCORES, RECOMMENDATIONS, InterviewFeedback
from ..models.job import Job
from .jobs import get_job
from .stage_tracker import COMPLETED, REJECTED, STAGE_LABELS, STAGE_ORDER, STAGE_STATUSES


def stage_funnel(job_id=None):
    """Per-stage status counts and the average score of completed rows."""
    q = (
        db.session.query(
            ApplicationStage.stage_name,
            ApplicationStage.status,
            func.count(ApplicationStage.id),
            func.avg(ApplicationStage.score),
        )
        .group_by(ApplicationStage.stage_name, ApplicationStage.status)
    )
    if job_id:
        q = q.join(Application, Application.id == ApplicationStage.application_id).filter(Application.job_id == job_id)

    funnel = {
        name: {"stage": name, "label": STAGE_LABELS[name], "counts": {s: 0 for s in STAGE_STATUSES}, "average_score": None}
        for name in STAGE_ORDER
    }
    for stage_name, status, cnt, avg in q.all():
        row = funnel.get(stage_name)
        if row is None or status not in row["counts"]:
            continue
        row["counts"][status] = int(cnt)
        if status == COMPLETED and avg is not None:
            row["average_score"] = round(float(avg), 2)
    for row in funnel.values():
        row["total"] = sum(row["counts"].values())
    return [funnel[name] for name in STAGE_ORDER]


def job_performance(job_id):
    job = get_job(job_id)
    rows = (
        db.session.query(Application.status, func.count(Application.id))
        .filter(Application.job_id == job.id)
        .group_by(Application.status)
        .all()
    )
    by_status = {status: int(cnt) for status, cnt in rows}
    total = sum(by_status.values())
    completed = by_status.get(COMPLETED, 0)
    rejected = by_status.get(REJECTED, 0)
    return {
        "job_id": job.id,
        "total_applications": total,
        "completed_applications": completed,
        "rejected_applications": rejected,
        "in_progress_applications": total - completed - rejected,
        "conversion_rate": round(completed / total * 100, 2) if total else 0.0,
        "by_status": by_status,
        "stages": stage_funnel(job.id),
    }


SCORE_BUCKETS = (("0-25", 25), ("26-50", 50), ("51-75", 75), ("76-100", 100))
FUNNEL_STATUSES = ("applied", "aptitude_test", "group_discussion", "technical_test", "hr_round", "completed")


def _score_bucket(score):
    for label, upper in SCORE_BUCKETS:
        if score <= upper:
            return label
    return SCORE_BUCKETS[-1][0]


def _percentage(count, total):
    return round(count / total * 100, 2) if total else 0.0


def candidate_analytics(top=10, today=None):
    """Application counts by status and stage, demand for skills, and how the
    resume scores are spread."""
    today = today or date.today()
    by_status = dict(
        db.session.query(Application.status, func.count(Application.id)).group_by(Application.status).all()
    )
    by_stage = dict(
        db.session.query(Application.current_stage, func.count(Application.id))
        .group_by(Application.current_stage).all()
    )
    total = sum(by_status.values())

    skills = Counter()
    for (required,) in db.session.query(Job.required_skills).filter(Job.required_skills.isnot(None)):
        skills.update(s for s in required or [] if s)

    # scores of 0 mean the resume stage has not been evaluated
    buckets = Counter()
    for (score,) in db.session.query(Application.qualification_score).filter(Application.qualification_score > 0):
        buckets[_score_bucket(score)] += 1

    months = Counter()
    first_month = date(today.year - 1, today.month, 1)
    for (applied,) in db.session.query(Application.applied_date).filter(Application.applied_date >= first_month):
        months[applied.strftime("%Y-%m")] += 1

    return {
        "total_applications": total,
        "by_status": {k: int(v) for k, v in by_status.items()},
        "by_stage": {k: int(v) for k, v in by_stage.items()},
        "top_skills": [{"skill": s, "count": c} for s, c in skills.most_common(top)],
        "hiring_funnel": [
            {"status": s, "count": by_status.get(s, 0), "percentage": _percentage(by_status.get(s, 0), total)}
            for s in FUNNEL_STATUSES
        ],
        "monthly_applications": [{"month": m, "count": months[m]} for m in sorted(months)],
        "qualification_score_distribution": [
            {"range": label, "count": buckets[label]} for label, _ in SCORE_BUCKETS
        ],
    }


def interview_analytics():
    total = db.session.query(func.count(Interview.id)).scalar() or 0
    average_rating = db.session.query(func.avg(Interview.rating)).filter(Interview.rating.isnot(None)).scalar()
    by_stage = dict(db.session.query(Interview.stage, func.count(Interview.id)).group_by(Interview.stage).all())
    by_status = dict(db.session.query(Interview.status, func.count(Interview.id)).group_by(Interview.status).all())

    averages = db.session.query(*(func.avg(getattr(InterviewFeedback, name)) for name in FEEDBACK_SCORES)).one()
    recommendations = {r: 0 for r in RECOMMENDATIONS}
    rows = (
        db.session.query(InterviewFeedback.overall_recommendation, func.count(InterviewFeedback.id))
        .group_by(InterviewFeedback.overall_recommendation)
        .all()
    )
    for recommendation, cnt in rows:
        recommendations[recommendation] = int(cnt)

    return {
        "total_interviews": int(total),
        "average_rating": round(float(average_rating), 2) if average_rating is not None else None,
        "by_stage": {k: int(v) for k, v in by_stage.items()},
        "by_status": {k: int(v) for k, v in by_status.items()},
        "feedback_averages": {
            name.replace("_score", ""): (round(float(avg), 2) if avg is not None else None)
            for name, avg in zip(FEEDBACK_SCORES, averages)
        },
        "recommendations": recommendations,
    }
