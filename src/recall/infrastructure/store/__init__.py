# Text Store Package
from .codec import IndexEntry, decode_cards, decode_index, encode_card, encode_cards, encode_index
from .repository import TextDeckRepository

__all__ = [
    "IndexEntry",
    "encode_card",
    "encode_cards",
    "decode_cards",
    "encode_index",
    "decode_index",
    "TextDeckRepository",
]
