"""
Application context factory.
Wires configuration, the text store and the deck service together.
"""

from dataclasses import dataclass

from recall.application.config import AppConfig
from recall.application.deck_service import DeckService
from recall.infrastructure.store.repository import TextDeckRepository


@dataclass
class AppContext:
    """Everything a front end needs for one run. Passed explicitly, never global."""

    config: AppConfig
    service: DeckService


def create_context(config: AppConfig, load: bool = True) -> AppContext:
    """
    Build the repository and service for `config`.

    With load=True the decks are read from disk and refreshed against the
    current time before returning.
    """
    repo = TextDeckRepository(
        config.data_dir,
        index_file=config.index_file,
        cards_dir=config.cards_dir,
    )
    service = DeckService(repo)
    if load:
        service.load_all()
        service.refresh()
    return AppContext(config=config, service=service)
