"""
SM-2 derived card scheduler.

This is a pure computation module with no I/O: it mutates one card in place
from a quality rating and stamps the review time.
"""

import math
from datetime import datetime, timezone

from recall.domain.constants import (
    EASE_BONUS,
    EASE_CEILING_GRADE,
    EASE_LINEAR,
    EASE_QUADRATIC,
    FIRST_EASY_INTERVAL,
    FIRST_GOOD_INTERVAL,
)
from recall.domain.models import Card, Quality, Status


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def ease_delta(quality: Quality) -> float:
    """
    Ease factor adjustment for a rating.

    delta = 0.1 - (5 - q) * (0.08 + (5 - q) * 0.02), with q the ordinal of the
    rating. Applied on every rating, lapses included, and never clamped.
    """
    distance = EASE_CEILING_GRADE - int(quality)
    return EASE_BONUS - distance * (EASE_LINEAR + distance * EASE_QUADRATIC)


def rate(card: Card, quality: Quality, now: datetime | None = None) -> Card:
    """
    Apply a rating to a card.

    Args:
        card: Card to update in place.
        quality: AGAIN resets to Learning; GOOD/EASY grow the interval and
            mark the card Complete.
        now: Review time. Defaults to the current UTC time.

    Returns:
        The same card, for chaining.
    """
    quality = Quality(quality)

    if quality is Quality.AGAIN:
        card.score = 0
        card.interval = 0
        card.status = Status.LEARNING
    else:
        if card.score == 0:
            card.interval = FIRST_EASY_INTERVAL if quality is Quality.EASY else FIRST_GOOD_INTERVAL
        else:
            card.interval = math.floor(card.interval * card.ease_factor)
        card.status = Status.COMPLETE
        card.score += 1

    card.ease_factor += ease_delta(quality)
    card.last_reviewed = now or utcnow()
    return card
