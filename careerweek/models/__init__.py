from .user import User
from .candidate import Candidate, CandidateStatus
from .interview import Interview, RoundType
# base mixins are imported by the above as needed
