from datetime import datetime

from careerweek.extensions import db
from careerweek.models import Interview
from careerweek.services.scoring import DIRECTOR_CATEGORIES, TECHNICAL_CATEGORIES


def _ratings(keys, value):
    return {k: str(value) for k in keys}


def test_new_form_renders_fixed_round(auth_client, user, make_candidate):
    c = make_candidate(user)
    resp = auth_client.get(f"/interviews/new?candidate_id={c.id}&round_type=director")
    body = resp.get_data(as_text=True)
    assert resp.status_code == 200
    assert "New Director Round" in body
    assert "Leadership Competencies" in body
    assert "both rounds required for final decision" in body


def test_unknown_round_type_is_400(auth_client, user, make_candidate):
    c = make_candidate(user)
    assert auth_client.get(f"/interviews/new?candidate_id={c.id}&round_type=culture").status_code == 400


def test_technical_round_score_from_breakdown(auth_client, user, make_candidate):
    c = make_candidate(user)
    data = _ratings(TECHNICAL_CATEGORIES, 7)
    data["feedback"] = "good fundamentals"
    resp = auth_client.post(f"/interviews/new?candidate_id={c.id}&round_type=technical", data=data)
    assert resp.status_code == 302
    i = Interview.query.one()
    assert i.round_type == "technical"
    assert i.score == 70  # 42 / 60
    assert i.details == {k: 7 for k in TECHNICAL_CATEGORIES}
    assert i.feedback == "good fundamentals"
    db.session.refresh(c)
    assert c.status == "in_progress"


def test_ratings_are_clamped(auth_client, user, make_candidate):
    c = make_candidate(user)
    data = _ratings(DIRECTOR_CATEGORIES, 15)
    auth_client.post(f"/interviews/new?candidate_id={c.id}&round_type=director", data=data)
    i = Interview.query.one()
    assert i.score == 100
    assert set(i.details.values()) == {10}


def test_second_deciding_round_hires(auth_client, user, make_candidate, make_interview):
    c = make_candidate(user)
    make_interview(c, "technical", score=80)
    data = _ratings(DIRECTOR_CATEGORIES, 6)  # 60%
    auth_client.post(f"/interviews/new?candidate_id={c.id}&round_type=director", data=data)
    db.session.refresh(c)
    assert c.status == "hired"  # (80 + 60) / 2 = 70


def test_second_deciding_round_rejects(auth_client, user, make_candidate, make_interview):
    c = make_candidate(user)
    make_interview(c, "director", score=50)
    data = _ratings(TECHNICAL_CATEGORIES, 8)  # 80%
    auth_client.post(f"/interviews/new?candidate_id={c.id}&round_type=technical", data=data)
    db.session.refresh(c)
    assert c.status == "rejected"  # (80 + 50) / 2 = 65


def test_hr_round_uses_manual_score_and_keeps_status(auth_client, user, make_candidate, make_interview):
    c = make_candidate(user)
    make_interview(c, "technical", score=90)
    resp = auth_client.post(f"/interviews/new?candidate_id={c.id}&round_type=hr",
                            data={"score": "85", "feedback": "friendly"})
    assert resp.status_code == 302
    hr = Interview.query.filter_by(round_type="hr").one()
    assert hr.score == 85 and hr.details is None
    db.session.refresh(c)
    assert c.status == "in_progress"


def test_hr_round_requires_score(auth_client, user, make_candidate):
    c = make_candidate(user)
    resp = auth_client.post(f"/interviews/new?candidate_id={c.id}&round_type=hr", data={"feedback": "x"})
    assert resp.status_code == 200
    assert b"Enter a score for this round." in resp.data
    assert Interview.query.count() == 0


def test_recalculate_does_not_save(auth_client, user, make_candidate, make_interview):
    c = make_candidate(user)
    make_interview(c, "technical", score=90)
    data = _ratings(DIRECTOR_CATEGORIES, 10)
    data["preview"] = "Recalculate"
    resp = auth_client.post(f"/interviews/new?candidate_id={c.id}&round_type=director", data=data)
    body = resp.get_data(as_text=True)
    assert resp.status_code == 200
    assert "Total: 100%" in body
    assert '<span class="badge badge-hired">hired</span>' in body
    assert Interview.query.filter_by(round_type="director").count() == 0


def test_round_index_increments_per_type(auth_client, user, make_candidate):
    c = make_candidate(user)
    for _ in range(2):
        auth_client.post(f"/interviews/new?candidate_id={c.id}&round_type=technical",
                         data=_ratings(TECHNICAL_CATEGORIES, 5))
    auth_client.post(f"/interviews/new?candidate_id={c.id}&round_type=hr", data={"score": "50"})
    indexes = sorted((i.round_type, i.round_index) for i in Interview.query.all())
    assert indexes == [("hr", 1), ("technical", 1), ("technical", 2)]


def test_second_director_round_is_refused(auth_client, user, make_candidate, make_interview):
    c = make_candidate(user)
    make_interview(c, "director", score=40)
    resp = auth_client.post(f"/interviews/new?candidate_id={c.id}&round_type=director",
                            data=_ratings(DIRECTOR_CATEGORIES, 9))
    assert resp.status_code == 302
    assert Interview.query.count() == 1


def test_edit_keeps_index_and_rederives_status(auth_client, user, make_candidate, make_interview):
    c = make_candidate(user)
    make_interview(c, "director", score=90)
    tech = make_interview(c, "technical", score=20, round_index=3, details={k: 2 for k in TECHNICAL_CATEGORIES})

    body = auth_client.get(f"/interviews/{tech.id}/edit").get_data(as_text=True)
    assert "Edit Interview" in body
    assert "Total: 20%" in body

    resp = auth_client.post(f"/interviews/{tech.id}/edit", data=_ratings(TECHNICAL_CATEGORIES, 6))
    assert resp.status_code == 302
    db.session.refresh(tech)
    db.session.refresh(c)
    assert tech.round_index == 3
    assert tech.score == 60
    assert c.status == "hired"  # (60 + 90) / 2 = 75


def test_edit_ignores_round_type_change(auth_client, user, make_candidate, make_interview):
    c = make_candidate(user)
    i = make_interview(c, "hr", score=40)
    auth_client.post(f"/interviews/{i.id}/edit", data={"round_type": "director", "score": "55"})
    db.session.refresh(i)
    assert i.round_type == "hr" and i.score == 55


def test_schedule_time_is_saved(auth_client, user, make_candidate):
    c = make_candidate(user)
    data = _ratings(TECHNICAL_CATEGORIES, 5)
    data["scheduled_at"] = "2026-12-01T09:00"
    auth_client.post(f"/interviews/new?candidate_id={c.id}&round_type=technical", data=data)
    assert Interview.query.one().scheduled_at == datetime(2026, 12, 1, 9, 0)


def test_delete_interview_leaves_status(auth_client, user, make_candidate, make_interview):
    c = make_candidate(user, status="hired")
    i = make_interview(c, "director", score=90)
    resp = auth_client.post(f"/interviews/{i.id}/delete", data={"confirm": "yes"})
    assert resp.status_code == 302
    assert Interview.query.count() == 0
    db.session.refresh(c)
    assert c.status == "hired"


def test_other_users_interview_is_404(auth_client, other_user, make_candidate, make_interview):
    c = make_candidate(other_user)
    i = make_interview(c, "technical", score=10)
    assert auth_client.get(f"/interviews/{i.id}/edit").status_code == 404
    assert auth_client.post(f"/interviews/{i.id}/delete", data={"confirm": "yes"}).status_code == 404
    assert auth_client.get(f"/interviews/new?candidate_id={c.id}").status_code == 404


def test_ics_download(auth_client, user, make_candidate, make_interview):
    c = make_candidate(user, name="Jane Roe")
    i = make_interview(c, "technical", scheduled_at=datetime(2026, 11, 2, 10, 30))
    resp = auth_client.get(f"/interviews/{i.id}/ics")
    assert resp.status_code == 200
    assert resp.mimetype == "text/calendar"
    text = resp.get_data(as_text=True)
    assert "DTSTART:20261102T103000Z" in text
    assert "DTEND:20261102T113000Z" in text
    assert "Technical interview: Jane Roe" in text


def test_ics_for_unscheduled_round_is_404(auth_client, user, make_candidate, make_interview):
    c = make_candidate(user)
    i = make_interview(c, "hr", score=10)
    assert auth_client.get(f"/interviews/{i.id}/ics").status_code == 404


def test_unknown_posted_round_type_is_400(auth_client, user, make_candidate):
    c = make_candidate(user)
    resp = auth_client.post(f"/interviews/new?candidate_id={c.id}", data={"round_type": "culture"})
    assert resp.status_code == 400
    assert Interview.query.count() == 0


def test_switching_round_type_returns_to_form(auth_client, user, make_candidate):
    c = make_candidate(user)
    data = _ratings(TECHNICAL_CATEGORIES, 9)
    data.update(round_type="director", shown_type="technical")
    resp = auth_client.post(f"/interviews/new?candidate_id={c.id}", data=data)
    body = resp.get_data(as_text=True)
    assert resp.status_code == 200
    assert "Round type changed" in body
    assert "Leadership Competencies" in body
    assert Interview.query.count() == 0

    data = _ratings(DIRECTOR_CATEGORIES, 7)
    data.update(round_type="director", shown_type="director")
    assert auth_client.post(f"/interviews/new?candidate_id={c.id}", data=data).status_code == 302
    i = Interview.query.one()
    assert i.round_type == "director" and i.score == 70
