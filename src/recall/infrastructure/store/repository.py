"""Filesystem repository: one index file plus one card file per deck."""

import logging
from pathlib import Path

from recall.domain.constants import CARD_FILE_SUFFIX, DEFAULT_CARDS_DIR, DEFAULT_INDEX_FILE
from recall.domain.errors import StoreError
from recall.domain.models import Deck
from recall.domain.ports import DeckRepository

from .codec import decode_cards, decode_index, encode_cards, encode_index


class TextDeckRepository(DeckRepository):
    """
    Markdown-backed deck store.

    Layout:
        <data_dir>/decks.md           deck listing
        <data_dir>/cards/<key>.md     cards of one deck

    Writes replace whole files in place. Any OS-level failure is raised as
    StoreError and is not retried.
    """

    def __init__(
        self,
        data_dir: Path,
        index_file: str = DEFAULT_INDEX_FILE,
        cards_dir: str = DEFAULT_CARDS_DIR,
    ):
        self.data_dir = Path(data_dir)
        self.index_path = self.data_dir / index_file
        self.cards_path = self.data_dir / cards_dir
        self.logger = logging.getLogger(__name__)

    def card_file(self, deck: Deck | str) -> Path:
        key = deck.storage_key if isinstance(deck, Deck) else deck
        return self.cards_path / f"{key}{CARD_FILE_SUFFIX}"

    def ensure_layout(self) -> None:
        try:
            self.cards_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StoreError(f"Cannot create {self.cards_path}: {e}", self.cards_path) from e

    def load_all(self) -> list[Deck]:
        self.ensure_layout()
        if not self.index_path.exists():
            self.logger.info(f"No index at {self.index_path}; creating an empty one")
            self.save_index([])

        decks = []
        for entry in decode_index(self._read(self.index_path)):
            path = self.card_file(entry.storage_key)
            if path.exists():
                cards = decode_cards(self._read(path))
            else:
                self.logger.warning(f"Card file for deck '{entry.name}' missing: {path}")
                cards = []
            decks.append(Deck(name=entry.name, storage_key=entry.storage_key, cards=cards))
        return decks

    def save_index(self, decks: list[Deck]) -> None:
        self._write(self.index_path, encode_index(decks))

    def save_deck(self, deck: Deck) -> None:
        path = self.card_file(deck)
        self._write(path, encode_cards(deck.cards))
        self.logger.debug(f"[write] {path}: {len(deck.cards)} card(s)")

    def delete_deck(self, deck: Deck) -> None:
        path = self.card_file(deck)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StoreError(f"Cannot remove {path}: {e}", path) from e

    def _read(self, path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StoreError(f"Cannot read {path}: {e}", path) from e

    def _write(self, path: Path, text: str) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise StoreError(f"Cannot write {path}: {e}", path) from e
