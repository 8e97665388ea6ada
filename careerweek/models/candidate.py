from enum import Enum

from ..extensions import db
from .base import OwnedMixin, TimestampMixin


class CandidateStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    HIRED = "hired"
    REJECTED = "rejected"
    # earlier revision of the pipeline; read and shown, never written
    COMPLETED = "completed"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")


# statuses a recruiter can pick in the edit form
EDITABLE_STATUSES = (CandidateStatus.IN_PROGRESS, CandidateStatus.HIRED, CandidateStatus.REJECTED)


class Candidate(db.Model, OwnedMixin, TimestampMixin):
    __tablename__ = "candidates"

    id = db.Column(db.Integer, primary_key=True)
    # OwnedMixin: user_id
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(254), nullable=False, index=True)
    phone = db.Column(db.String(40))
    status = db.Column(db.String(30), nullable=False, index=True, default=CandidateStatus.IN_PROGRESS.value)

    interviews = db.relationship(
        "Interview",
        backref="candidate",
        cascade="all, delete-orphan",
        order_by="Interview.created_at",
    )

    @property
    def status_label(self) -> str:
        try:
            return CandidateStatus(self.status).label
        except ValueError:
            return (self.status or "").replace("_", " ")

    @property
    def initial(self) -> str:
        return (self.name or "?")[:1].upper()

    def __repr__(self) -> str:
        return f"<Candidate id={self.id} name={self.name!r}>"
