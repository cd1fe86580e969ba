"""Tests for the markdown card and index codec."""

from datetime import datetime, timezone

from recall.domain.models import Card, Deck, Status
from recall.infrastructure.store.codec import (
    decode_cards,
    decode_index,
    encode_card,
    encode_cards,
    encode_index,
)


def test_encode_card_writes_every_field():
    """A rated card is written with every scheduling field."""
    card = Card(
        "2+2",
        "4",
        score=2,
        interval=10,
        ease_factor=-0.54,
        status=Status.COMPLETE,
        last_reviewed=datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc),
    )
    assert encode_card(card) == (
        "### Card\n"
        "- Front: 2+2\n"
        "- Back: 4\n"
        "- Score: 2\n"
        "- Interval: 10\n"
        "- Ease Factor: -0.54\n"
        "- Status: 3\n"
        "- Last Reviewed: 2026-01-01T12:00:00+00:00\n"
    )


def test_encode_unreviewed_card_leaves_time_empty():
    """Cards never reviewed get a blank Last Reviewed value."""
    text = encode_card(Card.new("q", "a"))
    assert "- Ease Factor: 0.00\n" in text
    assert "- Status: 0\n" in text
    assert text.endswith("- Last Reviewed: \n")


def test_round_trip_keeps_text_and_order_but_resets_scheduling():
    """Only front and back survive a reload."""
    cards = [
        Card("hola", "hello", score=3, interval=40, ease_factor=1.2, status=Status.REVIEW),
        Card("**bold** front", "back: with colon", status=Status.LEARNING),
        Card.new("", ""),
    ]

    decoded = decode_cards(encode_cards(cards))

    assert [(c.front, c.back) for c in decoded] == [(c.front, c.back) for c in cards]
    for card in decoded:
        assert card.status is Status.NEW
        assert card.score == 0
        assert card.interval == 0
        assert card.ease_factor == 0.0
        assert card.last_reviewed is None


def test_decode_cards_ignores_unknown_and_orphan_lines():
    text = (
        "# Cards\n"
        "- Front: orphan before any heading\n"
        "\n"
        "### Card\n"
        "- Front: uno\n"
        "some stray text\n"
        "- Back: one\n"
        "- Tags: ignored\n"
        "### Card\n"
        "- Back: two only\n"
    )

    cards = decode_cards(text)

    assert [(c.front, c.back) for c in cards] == [("uno", "one"), ("", "two only")]


def test_decode_cards_keeps_trailing_spaces_and_handles_crlf():
    cards = decode_cards("### Card\r\n- Front: a  \r\n- Back: b\r\n")
    assert (cards[0].front, cards[0].back) == ("a  ", "b")


def test_decode_empty_card_file():
    assert decode_cards(encode_cards([])) == []
    assert decode_cards("") == []


def test_encode_index():
    """Index entries list the deck name and its card file key."""
    decks = [Deck(name="Spanish", storage_key="spanish"), Deck(name="Maths")]
    assert encode_index(decks) == (
        "# Decks\n\n## Spanish\n- JSON File: spanish\n## Maths\n- JSON File: Maths\n"
    )


def test_decode_index():
    text = "# Decks\n\n## Spanish\n- JSON File: spanish\n## Maths\nnotes: ignored\n"

    entries = decode_index(text)

    assert [(e.name, e.storage_key) for e in entries] == [
        ("Spanish", "spanish"),
        ("Maths", "Maths"),
    ]


def test_decode_index_ignores_key_before_heading():
    """A key line with no heading above it is dropped."""
    entries = decode_index("- JSON File: stray\n## Spanish\n- JSON File: spanish\n")
    assert [(e.name, e.storage_key) for e in entries] == [("Spanish", "spanish")]


def test_decode_index_sanitises_path_like_keys():
    """Keys that would leave the cards directory are rewritten like deck names."""
    entries = decode_index("## Evil\n- JSON File: ../../x\n## Abs\n- JSON File: /etc/passwd\n")
    assert [e.storage_key for e in entries] == [".._.._x", "_etc_passwd"]
