"""
Line-oriented markdown codec for the deck index and per-deck card files.

Decoding is prefix driven: a heading line opens a new record, known field
lines fill it in, and everything else is skipped. Only the deck key and the
card front/back are read back; the remaining card fields are written for the
reader's benefit and reset to defaults on load.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from recall.domain.constants import (
    BACK_FIELD,
    CARD_HEADING,
    CARDS_HEADER,
    DECK_HEADING,
    DECK_KEY_FIELD,
    EASE_FIELD,
    FRONT_FIELD,
    INDEX_HEADER,
    INTERVAL_FIELD,
    LAST_REVIEWED_FIELD,
    SCORE_FIELD,
    STATUS_FIELD,
)
from recall.domain.models import Card, Deck, storage_key_for

logger = logging.getLogger(__name__)


@dataclass
class IndexEntry:
    """One deck listing from the index file."""

    name: str
    storage_key: str


# ---------- Cards ----------


def encode_card(card: Card) -> str:
    last_reviewed = card.last_reviewed.isoformat() if card.last_reviewed else ""
    return (
        f"{CARD_HEADING}\n"
        f"{FRONT_FIELD}{card.front}\n"
        f"{BACK_FIELD}{card.back}\n"
        f"{SCORE_FIELD}{card.score}\n"
        f"{INTERVAL_FIELD}{card.interval}\n"
        f"{EASE_FIELD}{card.ease_factor:.2f}\n"
        f"{STATUS_FIELD}{int(card.status)}\n"
        f"{LAST_REVIEWED_FIELD}{last_reviewed}\n"
    )


def encode_cards(cards: Iterable[Card]) -> str:
    return f"{CARDS_HEADER}\n\n" + "".join(encode_card(c) for c in cards)


def decode_cards(text: str) -> list[Card]:
    """Parse a card file. Every card comes back with New scheduling state."""
    cards: list[Card] = []
    current: Card | None = None

    for lineno, line in enumerate(text.splitlines(), start=1):
        if line.startswith(CARD_HEADING):
            current = Card.new("", "")
            cards.append(current)
        elif line.startswith(FRONT_FIELD):
            if current is not None:
                current.front = line[len(FRONT_FIELD) :]
        elif line.startswith(BACK_FIELD):
            if current is not None:
                current.back = line[len(BACK_FIELD) :]
        elif line.strip() and not _is_known_card_line(line):
            logger.debug(f"[codec] Skipped card line {lineno}: {line[:60]!r}")

    return cards


def _is_known_card_line(line: str) -> bool:
    return line.startswith(
        (
            CARDS_HEADER,
            SCORE_FIELD,
            INTERVAL_FIELD,
            EASE_FIELD,
            STATUS_FIELD,
            LAST_REVIEWED_FIELD,
        )
    )


# ---------- Index ----------


def encode_index(decks: Iterable[Deck]) -> str:
    lines = [f"{INDEX_HEADER}\n\n"]
    for deck in decks:
        lines.append(f"{DECK_HEADING}{deck.name}\n{DECK_KEY_FIELD}{deck.storage_key}\n")
    return "".join(lines)


def decode_index(text: str) -> list[IndexEntry]:
    """
    Parse the deck listing.

    A `## ` heading starts a deck; the key line that follows names its card
    file. Keys are passed through storage_key_for so they cannot point outside
    the cards directory. A heading without a key line falls back to a key
    derived from the deck name.
    """
    entries: list[IndexEntry] = []
    current: IndexEntry | None = None

    for lineno, line in enumerate(text.splitlines(), start=1):
        if line.startswith(DECK_HEADING):
            name = line[len(DECK_HEADING) :]
            current = IndexEntry(name=name, storage_key="")
            entries.append(current)
        elif line.startswith(DECK_KEY_FIELD):
            if current is not None:
                raw_key = line[len(DECK_KEY_FIELD) :].strip()
                current.storage_key = storage_key_for(raw_key) if raw_key else ""
                if raw_key and current.storage_key != raw_key:
                    logger.warning(
                        f"[codec] Deck '{current.name}': unsafe key {raw_key!r} "
                        f"stored as {current.storage_key!r}"
                    )
        elif line.strip() and not line.startswith(INDEX_HEADER):
            logger.debug(f"[codec] Skipped index line {lineno}: {line[:60]!r}")

    for entry in entries:
        if not entry.storage_key:
            entry.storage_key = storage_key_for(entry.name)
    return entries
