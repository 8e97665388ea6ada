from enum import Enum

from ..extensions import db
from .base import OwnedMixin, TimestampMixin


class RoundType(str, Enum):
    TECHNICAL = "technical"
    HR = "hr"
    DIRECTOR = "director"

    @property
    def label(self) -> str:
        return {"technical": "Technical", "hr": "HR", "director": "Director"}[self.value]


class Interview(db.Model, OwnedMixin, TimestampMixin):
    __tablename__ = "interviews"

    id = db.Column(db.Integer, primary_key=True)
    # OwnedMixin: user_id
    candidate_id = db.Column(db.Integer, db.ForeignKey("candidates.id", ondelete="CASCADE"), nullable=False, index=True)

    round_type = db.Column(db.String(20), nullable=False)  # technical/hr/director
    round_index = db.Column(db.Integer, nullable=False, default=1)
    score = db.Column(db.Float)  # 0-100, NULL until the round is scored
    feedback = db.Column(db.Text)
    details = db.Column(db.JSON)  # category -> 0-10, shape depends on round_type
    scheduled_at = db.Column(db.DateTime)

    @property
    def round_label(self) -> str:
        try:
            return RoundType(self.round_type).label
        except ValueError:
            return self.round_type

    def __repr__(self) -> str:
        return f"<Interview id={self.id} candidate_id={self.candidate_id} round={self.round_type}>"
