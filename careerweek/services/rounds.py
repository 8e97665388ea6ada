"""Store calls shared by the candidate and interview screens."""
from flask import current_app
from sqlalchemy import func

from ..extensions import db
from ..models.candidate import Candidate
from ..models.interview import Interview, RoundType
from .scoring import derive_status, empty_breakdown, status_from_rounds


def hire_threshold():
    return current_app.config.get("HIRE_THRESHOLD", 70)


def next_round_index(candidate_id, round_type):
    current = (
        db.session.query(func.max(Interview.round_index))
        .filter(Interview.candidate_id == candidate_id, Interview.round_type == round_type)
        .scalar()
    )
    return (current or 0) + 1


def schedule_first_round(candidate, scheduled_at, round_type=RoundType.TECHNICAL.value):
    """Insert an unscored round scheduled for ``scheduled_at`` and commit."""
    i = Interview(
        user_id=candidate.user_id,
        candidate_id=candidate.id,
        round_type=round_type,
        round_index=next_round_index(candidate.id, round_type),
        score=None,
        feedback="",
        details=empty_breakdown(round_type) or None,
        scheduled_at=scheduled_at,
    )
    db.session.add(i)
    db.session.commit()
    return i


def other_rounds(candidate_id, exclude_id=None):
    query = Interview.query.filter_by(candidate_id=candidate_id)
    if exclude_id is not None:
        query = query.filter(Interview.id != exclude_id)
    return query.order_by(Interview.created_at.asc(), Interview.id.asc()).all()


def preview_status(candidate, round_type, score, exclude_id=None):
    """Status the candidate would get if this round were saved with ``score``."""
    return derive_status(candidate.status, round_type, score,
                         other_rounds(candidate.id, exclude_id), hire_threshold())


def save_round(candidate, interview, values):
    """Insert or update ``interview`` from ``values`` then write the derived status.

    Two separate commits: a failure on the status write leaves the round saved.
    """
    status = preview_status(candidate, values["round_type"], values["score"],
                            exclude_id=interview.id if interview is not None else None)
    if interview is None:
        interview = Interview(
            user_id=candidate.user_id,
            candidate_id=candidate.id,
            round_index=next_round_index(candidate.id, values["round_type"]),
        )
        db.session.add(interview)
    interview.round_type = values["round_type"]
    interview.score = values["score"]
    interview.feedback = values.get("feedback") or ""
    interview.details = values.get("details")
    interview.scheduled_at = values.get("scheduled_at")
    db.session.commit()
    current_app.logger.info('interview saved id=%s candidate=%s round=%s score=%s',
                            interview.id, candidate.id, interview.round_type, interview.score)

    if status and status != candidate.status:
        candidate.status = status
        db.session.commit()
        current_app.logger.info('status derived candidate=%s status=%s', candidate.id, status)
    return interview


def recompute_status(candidate: Candidate):
    """Re-derive ``candidate.status`` from its stored rounds; returns True if it changed."""
    status = status_from_rounds(candidate.status, other_rounds(candidate.id), hire_threshold())
    if status == candidate.status:
        return False
    candidate.status = status
    return True
