import random
from datetime import timedelta

from recall.application.due_set import build_due_set, is_due, minutes_since
from recall.domain.models import Card, Deck, Status


def reviewed(now, minutes_ago, interval, status, front="q"):
    return Card(
        front,
        "a",
        score=1,
        interval=interval,
        status=status,
        last_reviewed=now - timedelta(minutes=minutes_ago),
    )


def test_minutes_since_floors(now):
    assert minutes_since(now - timedelta(minutes=9, seconds=59), now) == 9
    assert minutes_since(now - timedelta(minutes=10), now) == 10


def test_minutes_since_accepts_naive_times(now):
    """Naive datetimes are treated as UTC."""
    naive = (now - timedelta(minutes=5)).replace(tzinfo=None)
    assert minutes_since(naive, now) == 5


def test_new_cards_always_due(now):
    assert is_due(Card.new("q", "a"), now)


def test_rated_card_without_review_time_is_due(now):
    assert is_due(Card("q", "a", interval=100, status=Status.LEARNING), now)


def test_interval_boundary(now):
    """A card becomes due exactly when its interval has elapsed."""
    assert not is_due(reviewed(now, 9, 10, Status.COMPLETE), now)
    assert is_due(reviewed(now, 10, 10, Status.COMPLETE), now)


def test_selects_exactly_the_eligible_cards(now):
    eligible = [
        Card.new("new", "a"),
        reviewed(now, 0, 0, Status.LEARNING, "learning"),
        reviewed(now, 30, 20, Status.COMPLETE, "complete-due"),
        reviewed(now, 15, 10, Status.REVIEW, "review-due"),
    ]
    ineligible = [
        reviewed(now, 5, 10, Status.COMPLETE, "complete-early"),
        reviewed(now, 1, 5, Status.LEARNING, "learning-early"),
    ]
    deck = Deck(name="D", cards=eligible[:2] + ineligible + eligible[2:])

    due = build_due_set(deck, now)

    assert sorted(c.front for c in due) == sorted(c.front for c in eligible)
    assert all(any(c is d for d in deck.cards) for c in due)


def test_demotes_only_selected_complete_cards(now):
    """Only Complete cards that are due move back to Review."""
    due_card = reviewed(now, 30, 20, Status.COMPLETE, "due")
    early_card = reviewed(now, 5, 20, Status.COMPLETE, "early")
    deck = Deck(name="D", cards=[due_card, early_card])

    build_due_set(deck, now)

    assert due_card.status is Status.REVIEW
    assert due_card.interval == 20
    assert due_card.score == 1
    assert early_card.status is Status.COMPLETE


def test_result_is_a_shuffled_permutation(now):
    cards = [Card.new(str(i), "a") for i in range(20)]
    deck = Deck(name="D", cards=cards)

    due = build_due_set(deck, now, rng=random.Random(7))

    assert sorted(c.front for c in due) == sorted(c.front for c in cards)
    expected = list(cards)
    random.Random(7).shuffle(expected)
    assert due == expected


def test_empty_deck(now):
    assert build_due_set(Deck(name="D"), now) == []
