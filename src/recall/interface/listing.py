"""
Typed list items for front ends.

Decks and cards are shown in the same kind of list widget. Each item exposes a
title, a subtitle and the text a search box filters on, so renderers never
need to know which kind they are holding.
"""

from dataclasses import dataclass
from typing import ClassVar, Literal

from recall.domain.models import Card, Deck


@dataclass(frozen=True)
class DeckItem:
    kind: ClassVar[Literal["deck"]] = "deck"

    deck: Deck

    @property
    def title(self) -> str:
        return self.deck.name

    @property
    def subtitle(self) -> str:
        c = self.deck.counts
        return f"New: {c.new} | Learning: {c.learning} | Review: {c.review}"

    @property
    def filter_value(self) -> str:
        return self.deck.name


@dataclass(frozen=True)
class CardItem:
    kind: ClassVar[Literal["card"]] = "card"

    card: Card
    position: int  # 1-based, as shown to the user

    @property
    def title(self) -> str:
        return self.card.front

    @property
    def subtitle(self) -> str:
        return self.card.back

    @property
    def filter_value(self) -> str:
        return self.card.front


ListItem = DeckItem | CardItem


def deck_items(decks: list[Deck]) -> list[DeckItem]:
    return [DeckItem(deck) for deck in decks]


def card_items(deck: Deck) -> list[CardItem]:
    return [CardItem(card, i) for i, card in enumerate(deck.cards, start=1)]


def filter_items(items: list[ListItem], query: str | None) -> list[ListItem]:
    """Case-insensitive substring match on each item's filter value."""
    if not query:
        return list(items)
    needle = query.casefold()
    return [item for item in items if needle in item.filter_value.casefold()]
