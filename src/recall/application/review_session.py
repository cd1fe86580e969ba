"""ReviewSession: sequences one pass over a deck's due cards."""

import logging
from collections.abc import Callable
from datetime import datetime
from enum import Enum

from recall.domain.models import Card, Deck, Quality

from .due_set import build_due_set
from .scheduler import rate, utcnow

logger = logging.getLogger(__name__)


class SessionState(Enum):
    IDLE = "idle"
    ACTIVE = "active"
    COMPLETE = "complete"


class ReviewSession:
    """
    Review state machine for one deck.

    IDLE -> ACTIVE(revealed=False) <-> ACTIVE(revealed=True) -> COMPLETE.
    abort() returns to IDLE from anywhere. Calls made in the wrong state are
    ignored; callers are expected to check `state` and `revealed` first.
    """

    def __init__(self, deck: Deck, save: Callable[[Deck], None] | None = None):
        self.deck = deck
        self._save = save
        self.state = SessionState.IDLE
        self.revealed = False
        self.cards: list[Card] = []
        self.position = 0

    def start(self, now: datetime | None = None) -> "ReviewSession":
        self.cards = build_due_set(self.deck, now or utcnow())
        self.position = 0
        self.revealed = False
        self.deck.recount_statuses()
        if self.cards:
            self.state = SessionState.ACTIVE
        else:
            self.state = SessionState.COMPLETE
        logger.info(f"Review of '{self.deck.name}' started with {len(self.cards)} card(s)")
        return self

    @property
    def current(self) -> Card | None:
        if self.state is not SessionState.ACTIVE:
            return None
        return self.cards[self.position]

    @property
    def total(self) -> int:
        return len(self.cards)

    @property
    def remaining(self) -> int:
        return max(0, len(self.cards) - self.position)

    @property
    def progress(self) -> float:
        if not self.cards:
            return 1.0
        return self.position / len(self.cards)

    @property
    def is_complete(self) -> bool:
        return self.state is SessionState.COMPLETE

    def reveal(self) -> bool:
        """Show the answer side. Returns False when ignored."""
        if self.state is not SessionState.ACTIVE or self.revealed:
            logger.debug(f"reveal() ignored in state {self.state.value}")
            return False
        self.revealed = True
        return True

    def advance(self, quality: Quality, now: datetime | None = None) -> Card | None:
        """
        Rate the current card, persist the deck and move to the next card.

        Returns:
            The rated card, or None when the call was ignored.
        """
        if self.state is not SessionState.ACTIVE or not self.revealed:
            logger.debug(
                f"advance() ignored in state {self.state.value} (revealed={self.revealed})"
            )
            return None

        card = self.cards[self.position]
        rate(card, quality, now)
        self.deck.recount_statuses()
        if self._save is not None:
            self._save(self.deck)

        self.position += 1
        self.revealed = False
        if self.position >= len(self.cards):
            self.state = SessionState.COMPLETE
            logger.info(f"Review of '{self.deck.name}' complete ({len(self.cards)} card(s))")
        return card

    def abort(self) -> None:
        if self.state is SessionState.ACTIVE:
            logger.info(
                f"Review of '{self.deck.name}' aborted at {self.position}/{len(self.cards)}"
            )
        self.state = SessionState.IDLE
        self.revealed = False
