import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from careerweek import create_app
from careerweek.extensions import db
from careerweek.models import Candidate, Interview, User
from careerweek.blueprints.auth.tokens import make_token


@pytest.fixture
def app():
    app = create_app("config.TestConfig")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def sent_links(monkeypatch):
    """Capture magic-link mails instead of calling SendGrid."""
    sent = []

    def fake_send(to_email, link):
        sent.append((to_email, link))
        return 202, {}

    monkeypatch.setattr('careerweek.jobs.notify.send_magic_link', fake_send)
    return sent


@pytest.fixture
def user(app):
    u = User(email="recruiter@careerweek.com")
    db.session.add(u)
    db.session.commit()
    return u


@pytest.fixture
def other_user(app):
    u = User(email="someone@else.com")
    db.session.add(u)
    db.session.commit()
    return u


@pytest.fixture
def login(client):
    def _login(u):
        resp = client.get(f"/auth/verify/{make_token(u.email)}")
        assert resp.status_code == 302
        return resp
    return _login


@pytest.fixture
def auth_client(client, user, login):
    login(user)
    return client


@pytest.fixture
def make_candidate(app):
    def _make(owner, name="Jane Roe", email="jane@example.com", status="in_progress", phone=None):
        c = Candidate(user_id=owner.id, name=name, email=email, phone=phone, status=status)
        db.session.add(c)
        db.session.commit()
        return c
    return _make


@pytest.fixture
def make_interview(app):
    def _make(candidate, round_type="technical", score=0, details=None, round_index=1, scheduled_at=None, feedback=""):
        i = Interview(user_id=candidate.user_id, candidate_id=candidate.id, round_type=round_type,
                      round_index=round_index, score=score, details=details,
                      scheduled_at=scheduled_at, feedback=feedback)
        db.session.add(i)
        db.session.commit()
        return i
    return _make
