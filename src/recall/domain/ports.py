"""
Ports (interfaces) for deck persistence.

Application services depend on this abstraction, not on the text store.
"""

from abc import ABC, abstractmethod

from .models import Deck


class DeckRepository(ABC):
    """
    Port for loading and saving decks.

    Implementations:
        - TextDeckRepository: markdown index plus one markdown file per deck.
    """

    @abstractmethod
    def load_all(self) -> list[Deck]:
        """
        Load every deck listed in the index, with its cards.

        Returns:
            Decks in index order.
        """
        pass

    @abstractmethod
    def save_index(self, decks: list[Deck]) -> None:
        """Rewrite the deck listing from the given collection."""
        pass

    @abstractmethod
    def save_deck(self, deck: Deck) -> None:
        """Rewrite one deck's card file."""
        pass

    def save_all(self, decks: list[Deck]) -> None:
        self.save_index(decks)
        for deck in decks:
            self.save_deck(deck)

    @abstractmethod
    def delete_deck(self, deck: Deck) -> None:
        """Remove a deck's card file. The index is rewritten separately."""
        pass
