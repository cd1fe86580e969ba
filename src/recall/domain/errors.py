"""Exception hierarchy shared by every layer."""

from pathlib import Path


class RecallError(Exception):
    """Base class for errors the CLI reports to the user."""


class StoreError(RecallError):
    """A deck or index file could not be read or written."""

    def __init__(self, message: str, path: Path | None = None):
        super().__init__(message)
        self.path = path


class DeckNotFoundError(RecallError):
    pass


class DuplicateDeckError(RecallError):
    pass


class CardNotFoundError(RecallError):
    pass


class InvalidDeckNameError(RecallError):
    pass
