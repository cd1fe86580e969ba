"""
Domain models for decks and cards.

These are plain data structures with no I/O. Scheduling transitions live in
recall.application.scheduler; the only mutations here are collection edits.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum

from .errors import CardNotFoundError


class Status(IntEnum):
    NEW = 0
    LEARNING = 1
    REVIEW = 2
    COMPLETE = 3


class Quality(IntEnum):
    """Recall rating given after the answer is revealed."""

    AGAIN = 0
    GOOD = 1
    EASY = 2


@dataclass
class Card:
    """
    A single flashcard.

    Attributes:
        front: Question text. Opaque to the core; may contain markup.
        back: Answer text.
        score: Consecutive successful reviews since the last lapse.
        interval: Minutes that must pass after last_reviewed before the card is due.
        ease_factor: Interval multiplier, adjusted only by the scheduler.
        status: Position in the New/Learning/Review/Complete cycle.
        last_reviewed: UTC time of the last rating, None until first rated.
    """

    front: str
    back: str
    score: int = 0
    interval: int = 0
    ease_factor: float = 0.0
    status: Status = Status.NEW
    last_reviewed: datetime | None = None

    @classmethod
    def new(cls, front: str, back: str) -> "Card":
        return cls(front=front, back=back)


@dataclass(frozen=True)
class DeckCounts:
    new: int = 0
    learning: int = 0
    review: int = 0
    complete: int = 0

    @property
    def total(self) -> int:
        return self.new + self.learning + self.review + self.complete


_UNSAFE_KEY_CHARS = re.compile(r"[\\/:\x00]")


def storage_key_for(name: str) -> str:
    """Derive a file-name-safe storage key from a deck name."""
    key = _UNSAFE_KEY_CHARS.sub("_", name.strip())
    return key or "deck"


@dataclass
class Deck:
    """
    A named, ordered collection of cards.

    Card order is presentation order only. `counts` is a cache refreshed by
    recount_statuses(); it is never the source of truth.
    """

    name: str
    storage_key: str = ""
    cards: list[Card] = field(default_factory=list)
    counts: DeckCounts = field(default_factory=DeckCounts)
    _deleted: list[Card] = field(default_factory=list, repr=False, compare=False)

    def __post_init__(self):
        if not self.storage_key:
            self.storage_key = storage_key_for(self.name)
        self.recount_statuses()

    def recount_statuses(self) -> DeckCounts:
        tally = {status: 0 for status in Status}
        for card in self.cards:
            tally[card.status] += 1
        self.counts = DeckCounts(
            new=tally[Status.NEW],
            learning=tally[Status.LEARNING],
            review=tally[Status.REVIEW],
            complete=tally[Status.COMPLETE],
        )
        return self.counts

    def card_at(self, index: int) -> Card:
        if not 0 <= index < len(self.cards):
            raise CardNotFoundError(
                f"Deck '{self.name}' has no card #{index + 1} ({len(self.cards)} cards)"
            )
        return self.cards[index]

    def add_card(self, card: Card) -> Card:
        self.cards.append(card)
        self.recount_statuses()
        return card

    def edit_card(self, index: int, front: str | None = None, back: str | None = None) -> Card:
        """Replace a card's text; scheduling state is kept."""
        card = self.card_at(index)
        if front is not None:
            card.front = front
        if back is not None:
            card.back = back
        return card

    def delete_card(self, index: int) -> Card:
        """Soft delete: remove from the live list and push onto the undo stack."""
        card = self.card_at(index)
        del self.cards[index]
        self._deleted.append(card)
        self.recount_statuses()
        return card

    def undo_delete(self) -> Card | None:
        """Restore the most recently deleted card at the front of the deck."""
        if not self._deleted:
            return None
        card = self._deleted.pop()
        self.cards.insert(0, card)
        self.recount_statuses()
        return card

    @property
    def can_undo(self) -> bool:
        return bool(self._deleted)
