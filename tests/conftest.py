import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from config import TestingConfig
from hirepath import create_app
from hirepath.extensions import db
from hirepath.models.job import Job
from hirepath.models.user import User
from hirepath.services.applications import apply_to_job

PASSWORD = "password123"


@pytest.fixture
def app(tmp_path):
    app = create_app(TestingConfig)
    app.config['LOCAL_STORAGE_DIR'] = str(tmp_path / "storage")
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def ctx(app):
    """An app context for tests that call services directly."""
    with app.app_context():
        yield app


@pytest.fixture
def make_user(app):
    def _make(email, role="candidate", **kw):
        with app.app_context():
            u = User(email=email, role=role, name=kw.pop("name", email.split("@")[0]), **kw)
            u.set_password(PASSWORD)
            db.session.add(u)
            db.session.commit()
            return u.id
    return _make


@pytest.fixture
def make_job(app):
    def _make(posted_by=None, **kw):
        fields = dict(title="Backend Engineer", company="Acme", description="Build APIs",
                      location="Remote", job_type="full_time", experience_level="mid")
        fields.update(kw)
        with app.app_context():
            job = Job(posted_by=posted_by, **fields)
            db.session.add(job)
            db.session.commit()
            return job.id
    return _make


@pytest.fixture
def seeded(app, make_user, make_job):
    """One HR user, one candidate, one job and the candidate's application."""
    hr_id = make_user("hr@example.com", role="hr", company="Acme")
    candidate_id = make_user("cand@example.com")
    job_id = make_job(posted_by=hr_id)
    with app.app_context():
        application_id = apply_to_job(job_id, candidate_id, "Hello").id
    return {"hr_id": hr_id, "candidate_id": candidate_id, "job_id": job_id,
            "application_id": application_id}


@pytest.fixture
def login(app):
    def _login(email):
        client = app.test_client()
        resp = client.post("/auth/login", json={"email": email, "password": PASSWORD})
        assert resp.status_code == 200, resp.get_json()
        return client
    return _login
