# Application Package
from .deck_service import DeckService
from .due_set import build_due_set, is_due
from .review_session import ReviewSession, SessionState
from .scheduler import rate

__all__ = [
    "DeckService",
    "ReviewSession",
    "SessionState",
    "build_due_set",
    "is_due",
    "rate",
]
