from io import BytesIO

from hirepath.extensions import db
from hirepath.models.application import Application
from hirepath.services.resume_analysis import KEYWORDS
from hirepath.services.stage_tracker import STAGE_ORDER

STRONG_RESUME = " ".join(k for group in KEYWORDS.values() for k in group)


def test_health(app):
    assert app.test_client().get("/health").get_json() == {"status": "ok"}


def test_signup_and_login(app):
    client = app.test_client()
    resp = client.post("/auth/signup", json={
        "email": "new@example.com", "password": "longenough", "name": "New", "skills": ["python", "sql"],
    })
    assert resp.status_code == 201
    assert resp.get_json()["role"] == "candidate"

    resp = client.post("/auth/login", json={"email": "new@example.com", "password": "wrong-password"})
    assert resp.status_code == 401
    resp = client.post("/auth/login", json={"email": "new@example.com", "password": "longenough"})
    assert resp.status_code == 200
    assert client.get("/auth/me").get_json()["email"] == "new@example.com"


def test_signup_validation_errors(app):
    resp = app.test_client().post("/auth/signup", json={"email": "not-an-email", "password": "x"})
    assert resp.status_code == 400
    body = resp.get_json()
    assert body["error"] == "Invalid request"
    assert "email" in body["details"] and "password" in body["details"]


def test_second_hr_account_needs_hr(seeded, app, login):
    payload = {"email": "hr2@example.com", "password": "longenough", "role": "hr"}
    assert login("cand@example.com").post("/auth/signup", json=payload).status_code == 403
    assert login("hr@example.com").post("/auth/signup", json=payload).status_code == 201


def test_candidate_applies_and_sees_six_stages(seeded, app, make_user, login):
    make_user("fresh@example.com")
    client = login("fresh@example.com")
    resp = client.post(f"/jobs/{seeded['job_id']}/apply", json={"cover_letter": "Keen"})
    assert resp.status_code == 201
    body = resp.get_json()
    assert [s["stage_name"] for s in body["stages"]] == list(STAGE_ORDER)
    assert (body["status"], body["current_stage"], body["progress_percentage"]) == ("applied", "resume_upload", 10)

    again = client.post(f"/jobs/{seeded['job_id']}/apply", json={})
    assert again.status_code == 400
    assert "already applied" in again.get_json()["error"]


def test_hr_cannot_apply(seeded, login):
    assert login("hr@example.com").post(f"/jobs/{seeded['job_id']}/apply", json={}).status_code == 403


def test_application_access(seeded, app, make_user, login):
    app_id = seeded["application_id"]
    assert app.test_client().get(f"/applications/{app_id}").status_code == 401

    make_user("stranger@example.com")
    assert login("stranger@example.com").get(f"/applications/{app_id}").status_code == 403
    assert login("hr@example.com").get(f"/applications/{app_id}").status_code == 200

    resp = login("cand@example.com").get(f"/applications/{app_id}/stages")
    assert [s["stage_name"] for s in resp.get_json()] == list(STAGE_ORDER)
    assert login("cand@example.com").get("/applications/999").status_code == 404


def _pass_resume(login, application_id):
    resp = login("cand@example.com").post(f"/applications/{application_id}/resume",
                                          json={"resume_text": STRONG_RESUME})
    assert resp.get_json()["passed"] is True


def test_record_stage_through_route(seeded, login):
    app_id = seeded["application_id"]
    _pass_resume(login, app_id)
    client = login("hr@example.com")
    resp = client.post(f"/applications/{app_id}/stages/aptitude_test",
                       json={"status": "completed", "score": 70, "feedback": "solid"})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["stage"]["status"] == "completed"
    assert body["stage"]["completed_at"] is not None
    assert body["application"]["progress_percentage"] == 33
    assert body["application"]["current_stage"] == "group_discussion"


def test_record_stage_rejects_bad_input(seeded, login):
    app_id = seeded["application_id"]
    _pass_resume(login, app_id)
    client = login("hr@example.com")
    assert client.post(f"/applications/{app_id}/stages/coding_round",
                       json={"status": "completed", "score": 70}).status_code == 400
    assert client.post(f"/applications/{app_id}/stages/aptitude_test",
                       json={"status": "completed", "score": 170}).status_code == 400
    assert client.post(f"/applications/{app_id}/stages/aptitude_test",
                       json={"status": "passed", "score": 70}).status_code == 400
    # the resume stage only moves through the upload endpoint
    assert client.post(f"/applications/{app_id}/stages/resume_upload",
                       json={"status": "completed", "score": 99}).status_code == 400


def test_failed_resume_locks_later_stages(seeded, app, login):
    app_id = seeded["application_id"]
    client = login("cand@example.com")
    resp = client.post(f"/applications/{app_id}/resume", json={"resume_text": "A short resume."})
    assert resp.get_json()["passed"] is False

    for stage_name in STAGE_ORDER[1:]:
        resp = client.post(f"/applications/{app_id}/stages/{stage_name}", json={"status": "completed", "score": 100})
        assert resp.status_code == 400
        assert resp.get_json()["details"] == {"current_stage": "resume_upload"}

    with app.app_context():
        a = db.session.get(Application, app_id)
        assert (a.current_stage, a.progress_percentage, a.status) == ("resume_upload", 10, "applied")


def test_stages_cannot_be_skipped(seeded, login):
    app_id = seeded["application_id"]
    _pass_resume(login, app_id)
    client = login("cand@example.com")
    resp = client.post(f"/applications/{app_id}/stages/group_discussion", json={"status": "completed", "score": 90})
    assert resp.status_code == 400
    assert "locked" in resp.get_json()["error"]
    resp = client.post(f"/applications/{app_id}/stages/aptitude_test", json={"status": "in_progress"})
    assert resp.status_code == 200
    assert resp.get_json()["application"]["current_stage"] == "aptitude_test"


def test_completed_stage_cannot_be_reopened(seeded, app, login):
    app_id = seeded["application_id"]
    _pass_resume(login, app_id)
    client = login("cand@example.com")
    assert client.post(f"/applications/{app_id}/stages/aptitude_test",
                       json={"status": "completed", "score": 80}).status_code == 200

    for status in ("pending", "in_progress", "failed"):
        resp = client.post(f"/applications/{app_id}/stages/aptitude_test", json={"status": status, "score": 0})
        assert resp.status_code == 400
        assert "already completed" in resp.get_json()["error"]
    # a weaker resume cannot fail the passed resume stage
    assert client.post(f"/applications/{app_id}/resume",
                       json={"resume_text": "A short resume."}).status_code == 400

    with app.app_context():
        a = db.session.get(Application, app_id)
        assert (a.current_stage, a.progress_percentage) == ("group_discussion", 33)
        stages = {s.stage_name: s.status for s in a.stages}
        assert stages["resume_upload"] == "completed"
        assert stages["aptitude_test"] == "completed"


def test_resume_text_upload_passes(seeded, app, login):
    app_id = seeded["application_id"]
    resp = login("cand@example.com").post(f"/applications/{app_id}/resume", json={"resume_text": STRONG_RESUME})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["passed"] is True
    assert body["threshold"] == 75
    assert body["stage"]["score"] == 100
    assert body["application"]["progress_percentage"] == 17
    assert body["application"]["current_stage"] == "aptitude_test"
    assert body["application"]["status"] == "applied"


def test_resume_file_upload_below_threshold(seeded, app, login):
    app_id = seeded["application_id"]
    resp = login("cand@example.com").post(
        f"/applications/{app_id}/resume",
        data={"resume": (BytesIO(b"Short resume with a degree."), "cv.txt")},
        content_type="multipart/form-data",
    )
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["passed"] is False
    assert body["stage"]["status"] == "failed"
    assert body["application"]["resume_url"].startswith("file://")
    assert body["application"]["resume_url"].endswith("cv.txt")
    assert body["application"]["progress_percentage"] == 10

    with app.app_context():
        a = db.session.get(Application, app_id)
        assert a.qualification_score == 5
        assert a.resume_summary == "Short resume with a degree."


def test_resume_upload_needs_content(seeded, login):
    resp = login("cand@example.com").post(f"/applications/{seeded['application_id']}/resume", json={})
    assert resp.status_code == 400


def test_hr_routes_are_closed_to_candidates(seeded, login):
    client = login("cand@example.com")
    app_id = seeded["application_id"]
    assert client.get("/hr/applications").status_code == 403
    assert client.post(f"/hr/applications/{app_id}/status", json={"status": "completed"}).status_code == 403
    assert client.post("/jobs", json={"title": "x"}).status_code == 403


def test_hr_override_and_resync(seeded, login):
    app_id = seeded["application_id"]
    client = login("hr@example.com")

    listing = client.get("/hr/applications").get_json()
    assert listing[0]["candidate"]["email"] == "cand@example.com"

    resp = client.post(f"/hr/applications/{app_id}/status", json={"status": "technical_test", "reason": "fast track"})
    assert resp.status_code == 200
    assert resp.get_json()["progress_percentage"] == 75

    events = client.get(f"/hr/applications/{app_id}/overrides").get_json()
    assert [(e["old_status"], e["new_status"]) for e in events] == [("applied", "technical_test")]

    resp = client.post(f"/hr/applications/{app_id}/resync")
    body = resp.get_json()
    assert (body["status"], body["progress_percentage"]) == ("applied", 10)
    assert len(body["stages"]) == 6

    assert client.post(f"/hr/applications/{app_id}/status", json={"status": "hired"}).status_code == 400


def test_stage_analytics(seeded, login):
    rows = login("hr@example.com").get(f"/hr/analytics/stages?job_id={seeded['job_id']}").get_json()
    assert [r["stage"] for r in rows] == list(STAGE_ORDER)
    assert all(r["counts"]["pending"] == 1 for r in rows)


def test_post_job_and_metrics(seeded, login):
    client = login("hr@example.com")
    resp = client.post("/jobs", json={
        "title": "Data Engineer", "company": "Acme", "description": "Pipelines",
        "location": "Berlin", "job_type": "contract", "experience_level": "senior",
        "required_skills": "python, airflow",
    })
    assert resp.status_code == 201
    job = resp.get_json()
    assert job["required_skills"] == ["python", "airflow"]
    assert any(j["id"] == job["id"] for j in client.get("/jobs").get_json())

    metrics = client.get(f"/jobs/{seeded['job_id']}/metrics").get_json()
    assert metrics["total_applications"] == 1
    assert client.get("/jobs/999").status_code == 404


def test_schedule_interview_routes(seeded, login):
    app_id = seeded["application_id"]
    hr = login("hr@example.com")

    resp = hr.post("/interviews", json={"application_id": app_id, "stage": "hr_round", "scheduled_date": "2030-01-02"})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Please select a stage and a time slot"

    resp = hr.post("/interviews", json={"application_id": app_id, "stage": "hr_round",
                                        "scheduled_date": "2030-01-02", "scheduled_time": "14:30"})
    assert resp.status_code == 201
    interview_id = resp.get_json()["id"]

    candidate = login("cand@example.com")
    detail = candidate.get(f"/applications/{app_id}").get_json()
    assert detail["next_interview_stage"] == "hr_round"
    assert detail["next_interview_date"] == "2030-01-02"

    ics = candidate.get(f"/interviews/{interview_id}/ics")
    assert ics.status_code == 200
    assert ics.mimetype == "text/calendar"
    assert b"DTSTART:20300102T143000" in ics.data

    assert candidate.get(f"/interviews?application_id={app_id}").status_code == 200
    assert candidate.get("/interviews").status_code == 403

    resp = hr.post(f"/interviews/{interview_id}/status", json={"status": "completed", "rating": 5})
    assert resp.get_json()["status"] == "completed"
    assert hr.post(f"/interviews/{interview_id}/status", json={"status": "completed", "rating": 7}).status_code == 400


def test_notifications_follow_stage_outcomes(seeded, login):
    app_id = seeded["application_id"]
    _pass_resume(login, app_id)
    login("hr@example.com").post(f"/applications/{app_id}/stages/aptitude_test",
                                 json={"status": "completed", "score": 80})
    client = login("cand@example.com")
    items = client.get("/notifications?unread=1").get_json()
    assert [n["title"] for n in items] == ["Aptitude Test completed", "Resume Upload completed"]

    assert client.post(f"/notifications/{items[0]['id']}/read").get_json()["is_read"] is True
    assert [n["id"] for n in client.get("/notifications?unread=1").get_json()] == [items[1]["id"]]
    assert login("hr@example.com").post(f"/notifications/{items[0]['id']}/read").status_code == 404


def test_interview_feedback_and_reminder_routes(seeded, login):
    hr = login("hr@example.com")
    interview_id = hr.post("/interviews", json={
        "application_id": seeded["application_id"], "stage": "technical_test",
        "scheduled_date": "2030-01-02", "scheduled_time": "09:30",
    }).get_json()["id"]

    resp = hr.post(f"/interviews/{interview_id}/feedback", json={
        "technical_score": 85, "communication_score": 75, "problem_solving_score": 80,
        "cultural_fit_score": 70, "overall_recommendation": "hire", "strengths": ["python", "sql"],
    })
    assert resp.status_code == 201
    assert resp.get_json()["strengths"] == ["python", "sql"]

    resp = hr.post(f"/interviews/{interview_id}/feedback", json={"technical_score": 85})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Please select an overall recommendation"

    items = hr.get(f"/interviews/{interview_id}/feedback").get_json()
    assert [f["overall_recommendation"] for f in items] == ["hire"]

    resp = hr.post(f"/interviews/{interview_id}/reminder")
    assert resp.status_code == 202
    assert resp.get_json()["reminder_sent"] is True

    candidate = login("cand@example.com")
    assert candidate.get(f"/interviews/{interview_id}/feedback").status_code == 403
    assert candidate.post(f"/interviews/{interview_id}/reminder").status_code == 403
    assert [n["type"] for n in candidate.get("/notifications").get_json()] == ["interview_reminder"]


def test_hr_analytics_routes(seeded, login):
    hr = login("hr@example.com")
    candidates = hr.get("/hr/analytics/candidates").get_json()
    assert candidates["total_applications"] == 1
    assert candidates["by_stage"] == {"resume_upload": 1}
    interviews = hr.get("/hr/analytics/interviews").get_json()
    assert interviews["total_interviews"] == 0
    assert login("cand@example.com").get("/hr/analytics/candidates").status_code == 403
