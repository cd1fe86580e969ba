"""
Deck Service: application layer orchestrator.

Owns the in-memory deck collection and coordinates edits, review sessions and
persistence through the DeckRepository port.
"""

import logging
from datetime import datetime

from recall.domain.errors import DeckNotFoundError, DuplicateDeckError, InvalidDeckNameError
from recall.domain.models import Card, Deck, storage_key_for
from recall.domain.ports import DeckRepository

from .due_set import build_due_set
from .review_session import ReviewSession
from .scheduler import utcnow

logger = logging.getLogger(__name__)


class DeckService:
    """
    Application service for deck and card management.

    Depends on the DeckRepository abstraction, not on the text store. Every
    card edit saves the affected deck before returning.
    """

    def __init__(self, repository: DeckRepository):
        self._repo = repository
        self.decks: list[Deck] = []

    def load_all(self) -> list[Deck]:
        self.decks = self._repo.load_all()
        logger.debug(f"Loaded {len(self.decks)} deck(s)")
        return self.decks

    def save_all(self) -> None:
        self._repo.save_all(self.decks)

    def save_deck(self, deck: Deck) -> None:
        self._repo.save_deck(deck)

    def get_deck(self, name: str) -> Deck:
        for deck in self.decks:
            if deck.name == name:
                return deck
        raise DeckNotFoundError(f"No deck named '{name}'")

    def create_deck(self, name: str) -> Deck:
        name = name.strip()
        if not name or "\n" in name or "\r" in name:
            raise InvalidDeckNameError(f"Invalid deck name {name!r}: must be one non-empty line")
        key = storage_key_for(name)
        for deck in self.decks:
            if deck.name == name or deck.storage_key == key:
                raise DuplicateDeckError(f"Deck '{name}' already exists")

        deck = Deck(name=name, storage_key=key)
        self.decks.append(deck)
        self._repo.save_deck(deck)
        self._repo.save_index(self.decks)
        logger.info(f"Created deck '{name}'")
        return deck

    def delete_deck(self, name: str) -> Deck:
        deck = self.get_deck(name)
        self._repo.delete_deck(deck)
        self.decks.remove(deck)
        self._repo.save_index(self.decks)
        logger.info(f"Deleted deck '{name}'")
        return deck

    def add_card(self, deck: Deck, front: str, back: str) -> Card:
        card = deck.add_card(Card.new(front, back))
        self._repo.save_deck(deck)
        return card

    def edit_card(
        self, deck: Deck, index: int, front: str | None = None, back: str | None = None
    ) -> Card:
        card = deck.edit_card(index, front=front, back=back)
        self._repo.save_deck(deck)
        return card

    def delete_card(self, deck: Deck, index: int) -> Card:
        card = deck.delete_card(index)
        self._repo.save_deck(deck)
        return card

    def undo_delete(self, deck: Deck) -> Card | None:
        card = deck.undo_delete()
        if card is not None:
            self._repo.save_deck(deck)
        return card

    def start_review(self, deck: Deck, now: datetime | None = None) -> ReviewSession:
        """Build a fresh session over the deck's due cards."""
        return ReviewSession(deck, save=self._repo.save_deck).start(now)

    def refresh(self, now: datetime | None = None) -> None:
        """
        Re-evaluate every deck at start-up.

        Complete cards that have come due are demoted to Review so the counts
        shown before a session reflect what the session will contain.
        """
        now = now or utcnow()
        for deck in self.decks:
            build_due_set(deck, now)
            deck.recount_statuses()
