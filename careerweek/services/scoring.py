"""Interview scoring and pipeline status derivation.

Technical and director rounds are scored from per-category ratings (0-10)
and turned into a percentage. Once a candidate has both a technical and a
director round, the mean of the two percentages decides hired/rejected.
HR rounds carry a manually entered 0-100 score and never affect the status.
"""
import math

from ..models.candidate import CandidateStatus
from ..models.interview import RoundType

TECHNICAL_CATEGORIES = (
    "programming_fundamentals",
    "database_system",
    "code_quality",
    "dsa",
    "cicd",
    "error_handling",
)

DIRECTOR_CATEGORIES = (
    "personality",
    "communication",
    "team_work",
    "problem_solving",
    "prompt_engineering",
)

CATEGORIES = {
    RoundType.TECHNICAL.value: TECHNICAL_CATEGORIES,
    RoundType.DIRECTOR.value: DIRECTOR_CATEGORIES,
}

MAX_RATING = 10
DEFAULT_HIRE_THRESHOLD = 70

# the two round types whose average decides the outcome
DECIDING_ROUNDS = {
    RoundType.TECHNICAL.value: RoundType.DIRECTOR.value,
    RoundType.DIRECTOR.value: RoundType.TECHNICAL.value,
}


class ScoringError(ValueError):
    pass


def _round_half_up(value):
    return int(math.floor(value + 0.5))


def _as_round_type(round_type):
    try:
        return RoundType(round_type).value
    except ValueError:
        raise ScoringError(f"unknown round type: {round_type!r}")


def categories_for(round_type):
    """Category names rated for ``round_type``; empty for rounds scored by hand."""
    return CATEGORIES.get(_as_round_type(round_type), ())


def clamp_rating(value):
    """Clamp a single category rating into [0, 10]; garbage becomes 0."""
    try:
        num = float(value)
    except (TypeError, ValueError):
        return 0
    if math.isnan(num):
        return 0
    num = min(MAX_RATING, max(0, num))
    return int(num) if num == int(num) else num


def empty_breakdown(round_type):
    return {key: 0 for key in categories_for(round_type)}


def normalize_breakdown(round_type, breakdown):
    """Return a full breakdown for ``round_type`` with every rating clamped.

    Missing categories default to 0. Keys that do not belong to the round
    raise ScoringError. Rounds without categories return None.
    """
    keys = categories_for(round_type)
    if not keys:
        return None
    breakdown = breakdown or {}
    unknown = set(breakdown) - set(keys)
    if unknown:
        raise ScoringError(f"unexpected categories for {round_type} round: {sorted(unknown)}")
    return {key: clamp_rating(breakdown.get(key, 0)) for key in keys}


def _total(breakdown, keys):
    total = sum(clamp_rating((breakdown or {}).get(key, 0)) for key in keys)
    return _round_half_up(total / (len(keys) * MAX_RATING) * 100)


def technical_total(breakdown):
    """round(sum of 6 ratings / 60 * 100)"""
    return _total(breakdown, TECHNICAL_CATEGORIES)


def director_total(breakdown):
    """round(sum of 5 ratings / 50 * 100)"""
    return _total(breakdown, DIRECTOR_CATEGORIES)


def breakdown_total(round_type, breakdown):
    rt = _as_round_type(round_type)
    if rt == RoundType.TECHNICAL.value:
        return technical_total(breakdown)
    if rt == RoundType.DIRECTOR.value:
        return director_total(breakdown)
    return None


def overall_score(technical, director):
    return (float(technical) + float(director)) / 2


def decide(technical, director, threshold=DEFAULT_HIRE_THRESHOLD):
    if overall_score(technical, director) >= threshold:
        return CandidateStatus.HIRED.value
    return CandidateStatus.REJECTED.value


def _get(row, attr):
    if isinstance(row, dict):
        return row.get(attr)
    return getattr(row, attr, None)


def first_scored(interviews, round_type):
    """First round of ``round_type`` that has a score; scheduled placeholders are skipped."""
    return next(
        (i for i in interviews if _get(i, "round_type") == round_type and _get(i, "score") is not None),
        None,
    )


def derive_status(current_status, round_type, score, other_interviews=(), threshold=DEFAULT_HIRE_THRESHOLD):
    """Status a candidate should have after saving a ``round_type`` round.

    ``other_interviews`` are the candidate's other rounds (rows or dicts with
    ``round_type`` and ``score``), excluding the one being saved. Only when
    a scored counterpart of a technical/director round exists is a terminal
    decision made; otherwise the current status is kept.
    """
    rt = _as_round_type(round_type)
    fallback = current_status or CandidateStatus.IN_PROGRESS.value
    counterpart_type = DECIDING_ROUNDS.get(rt)
    if counterpart_type is None or score is None:
        return fallback
    counterpart = first_scored(other_interviews, counterpart_type)
    if counterpart is None:
        return fallback
    if rt == RoundType.TECHNICAL.value:
        return decide(score, _get(counterpart, "score"), threshold)
    return decide(_get(counterpart, "score"), score, threshold)


def status_from_rounds(current_status, interviews, threshold=DEFAULT_HIRE_THRESHOLD):
    """Re-derive a status from every stored round of a candidate.

    Uses the first scored technical and director rounds, matching the
    lookup done when a round is saved.
    """
    technical = first_scored(interviews, RoundType.TECHNICAL.value)
    director = first_scored(interviews, RoundType.DIRECTOR.value)
    if technical is None or director is None:
        return current_status or CandidateStatus.IN_PROGRESS.value
    return decide(_get(technical, "score"), _get(director, "score"), threshold)
