"""
Due-set selection for review sessions.

Builds the session queue for a deck by:
1. Taking every New card
2. Taking every other card whose interval has elapsed since its last review
3. Demoting selected Complete cards to Review
4. Shuffling the result (order carries no scheduling meaning)
"""

import logging
import random
from datetime import datetime, timezone

from recall.domain.models import Card, Deck, Status

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def minutes_since(then: datetime, now: datetime) -> int:
    """Whole minutes elapsed from `then` to `now`, floored."""
    seconds = (_as_utc(now) - _as_utc(then)).total_seconds()
    return int(seconds // 60)


def is_due(card: Card, now: datetime) -> bool:
    """
    Eligibility predicate, without side effects.

    New cards are always due. A rated card with no review time on record is
    treated as due.
    """
    if card.status == Status.NEW:
        return True
    if card.last_reviewed is None:
        return True
    return minutes_since(card.last_reviewed, now) >= card.interval


def build_due_set(
    deck: Deck,
    now: datetime,
    rng: random.Random | None = None,
) -> list[Card]:
    """
    Select and shuffle the cards of `deck` that are due at `now`.

    Args:
        deck: Deck whose cards are examined. Selected Complete cards are
            demoted to Review in place.
        now: Reference time.
        rng: Optional random source for the shuffle.

    Returns:
        A uniformly shuffled list of the due cards (the same Card objects held
        by the deck).
    """
    due: list[Card] = []
    for card in deck.cards:
        if not is_due(card, now):
            continue
        if card.status == Status.COMPLETE:
            card.status = Status.REVIEW
        due.append(card)

    (rng or random).shuffle(due)
    logger.debug(f"[due] {deck.name}: {len(due)}/{len(deck.cards)} cards due")
    return due
