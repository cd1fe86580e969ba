# Domain Package
from .errors import (
    CardNotFoundError,
    DeckNotFoundError,
    DuplicateDeckError,
    InvalidDeckNameError,
    RecallError,
    StoreError,
)
from .models import Card, Deck, DeckCounts, Quality, Status, storage_key_for
from .ports import DeckRepository

__all__ = [
    "Card",
    "Deck",
    "DeckCounts",
    "Quality",
    "Status",
    "storage_key_for",
    "DeckRepository",
    "RecallError",
    "StoreError",
    "DeckNotFoundError",
    "DuplicateDeckError",
    "InvalidDeckNameError",
    "CardNotFoundError",
]
