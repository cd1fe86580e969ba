"""recall: spaced-repetition flashcards backed by plain markdown files."""

from recall.consts import VERSION

__version__ = VERSION
