"""Dashboard board: one status column per pipeline stage, searched and paged
by the store."""
from dataclasses import dataclass

from flask_sqlalchemy.pagination import Pagination
from sqlalchemy import or_

from ..models.candidate import Candidate, CandidateStatus

BOARD_COLUMNS = (CandidateStatus.IN_PROGRESS, CandidateStatus.HIRED, CandidateStatus.REJECTED)

EMPTY_COLUMN_TEXT = {
    CandidateStatus.IN_PROGRESS.value: "No active candidates",
    CandidateStatus.HIRED.value: "No hired candidates yet",
    CandidateStatus.REJECTED.value: "No rejected candidates",
    CandidateStatus.COMPLETED.value: "No completed candidates",
}

_KNOWN = [s.value for s in CandidateStatus if s is not CandidateStatus.IN_PROGRESS]


@dataclass
class Column:
    status: str
    page: Pagination

    @property
    def label(self) -> str:
        return CandidateStatus(self.status).label

    @property
    def empty_text(self) -> str:
        return EMPTY_COLUMN_TEXT.get(self.status, "")


def search_clause(term):
    """Case-insensitive substring match on name or email; None for a blank term."""
    needle = (term or "").strip()
    if not needle:
        return None
    pattern = f"%{needle}%"
    return or_(Candidate.name.ilike(pattern), Candidate.email.ilike(pattern))


def column_query(user_id, status, term=None):
    """Candidates of ``user_id`` shown in the ``status`` column, newest first.

    Rows with a status outside the known set are shown as in progress.
    """
    query = Candidate.query.filter_by(user_id=user_id)
    if status == CandidateStatus.IN_PROGRESS.value:
        query = query.filter(or_(Candidate.status.is_(None), Candidate.status.not_in(_KNOWN)))
    else:
        query = query.filter(Candidate.status == status)
    clause = search_clause(term)
    if clause is not None:
        query = query.filter(clause)
    return query.order_by(Candidate.created_at.desc(), Candidate.id.desc())


def board_statuses(user_id):
    """Column order; the legacy completed column only appears while such rows exist."""
    statuses = [s.value for s in BOARD_COLUMNS]
    if Candidate.query.filter_by(user_id=user_id, status=CandidateStatus.COMPLETED.value).first() is not None:
        statuses.append(CandidateStatus.COMPLETED.value)
    return statuses


def build_board(user_id, term=None, page=1, per_page=20):
    """Page every column of the board with the same page number.

    Returns the columns, the page actually shown and the page count of the
    longest column. Pages past the end fall back to the last one.
    """
    page = max(1, page or 1)
    queries = [(status, column_query(user_id, status, term)) for status in board_statuses(user_id)]
    pagers = [q.paginate(page=page, per_page=per_page, error_out=False) for _, q in queries]
    pages = max([p.pages for p in pagers] + [1])
    if page > pages:
        page = pages
        pagers = [q.paginate(page=page, per_page=per_page, error_out=False) for _, q in queries]
    columns = [Column(status, pager) for (status, _), pager in zip(queries, pagers)]
    return columns, page, pages
