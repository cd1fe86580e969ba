"""recall CLI: deck management commands and the interactive review loop."""

import json
import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated

import typer

from recall.application.config import resolve_config
from recall.application.factory import AppContext, create_context
from recall.application.review_session import SessionState
from recall.domain.errors import RecallError, StoreError
from recall.domain.models import Quality

from .listing import card_items, deck_items, filter_items

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="recall: spaced-repetition flashcards in plain markdown.",
    no_args_is_help=True,
)

config_app = typer.Typer(help="Inspect recall configuration.")
app.add_typer(config_app, name="config")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

_LOG_LEVELS = {1: logging.WARNING, 2: logging.INFO}

RATING_KEYS = {
    "a": Quality.AGAIN,
    "again": Quality.AGAIN,
    "g": Quality.GOOD,
    "good": Quality.GOOD,
    "e": Quality.EASY,
    "easy": Quality.EASY,
}
QUIT_KEYS = {"q", "quit"}


def humanize_error(e: Exception) -> str:
    if isinstance(e, StoreError):
        return f"Storage error: {e}"
    return str(e)


@contextmanager
def _reporting_errors() -> Iterator[None]:
    try:
        yield
    except RecallError as e:
        if isinstance(e, StoreError):
            logger.error(f"Store failure: {e}")
        logger.debug("Command failed", exc_info=True)
        typer.secho(humanize_error(e), fg="red", err=True)
        raise typer.Exit(1) from e


def _context(ctx: typer.Context) -> AppContext:
    obj = ctx.obj or {}
    config = resolve_config(
        {"data_dir": obj.get("data_dir"), "verbose": obj.get("verbose")}
    )
    return create_context(config)


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 1,
    data_dir: Annotated[
        Path | None, typer.Option(help="Directory holding decks.md and cards/.")
    ] = None,
):
    """Global settings for recall."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["data_dir"] = data_dir
    logging.getLogger().setLevel(_LOG_LEVELS.get(verbose, logging.DEBUG))


# ---------------------------------------------------------------------------
# Deck commands
# ---------------------------------------------------------------------------


@app.command("decks")
def list_decks(ctx: typer.Context):
    """List decks with their New / Learning / Review counts."""
    with _reporting_errors():
        service = _context(ctx).service

    if not service.decks:
        typer.echo("No decks yet. Create one with 'recall new-deck NAME'.")
        return

    typer.echo("Decks:")
    for i, item in enumerate(deck_items(service.decks), start=1):
        typer.echo(f"{i}. {item.title}\n   {item.subtitle}")


@app.command("new-deck")
def new_deck(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Name of the new deck.")],
):
    """Create an empty deck."""
    with _reporting_errors():
        _context(ctx).service.create_deck(name)
    typer.secho(f"Created deck '{name}'.", fg="green")


@app.command("delete-deck")
def delete_deck(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Deck to delete.")],
    force: Annotated[bool, typer.Option("--force", "-f", help="Skip confirmation.")] = False,
):
    """Delete a deck and its card file."""
    with _reporting_errors():
        service = _context(ctx).service
        deck = service.get_deck(name)
        if not force and not typer.confirm(
            f"Delete '{deck.name}' and its {len(deck.cards)} card(s)?"
        ):
            raise typer.Exit(1)
        service.delete_deck(name)
    typer.secho(f"Deleted deck '{name}'.", fg="green")


# ---------------------------------------------------------------------------
# Card commands
# ---------------------------------------------------------------------------


@app.command("add")
def add_card(
    ctx: typer.Context,
    deck: Annotated[str, typer.Argument(help="Deck to add the card to.")],
    front: Annotated[str, typer.Option(prompt=True, help="Question side.")],
    back: Annotated[str, typer.Option(prompt=True, help="Answer side.")],
):
    """Add a new card to a deck."""
    with _reporting_errors():
        service = _context(ctx).service
        target = service.get_deck(deck)
        service.add_card(target, front, back)
    typer.secho(f"Added card #{len(target.cards)} to '{target.name}'.", fg="green")


@app.command("cards")
def list_cards(
    ctx: typer.Context,
    deck: Annotated[str, typer.Argument(help="Deck to list.")],
    filter_text: Annotated[
        str | None, typer.Option("--filter", help="Only cards whose front contains this.")
    ] = None,
):
    """List the cards of a deck."""
    with _reporting_errors():
        target = _context(ctx).service.get_deck(deck)

    items = filter_items(card_items(target), filter_text)
    if not items:
        typer.echo("No cards.")
        return
    for item in items:
        typer.echo(f"{item.position}. {item.title}\n   {item.subtitle}")


@app.command("edit")
def edit_card(
    ctx: typer.Context,
    deck: Annotated[str, typer.Argument(help="Deck holding the card.")],
    index: Annotated[int, typer.Argument(help="Card number as shown by 'recall cards'.")],
    front: Annotated[str | None, typer.Option(help="New question side.")] = None,
    back: Annotated[str | None, typer.Option(help="New answer side.")] = None,
):
    """Change a card's text. Its review progress is kept."""
    if front is None and back is None:
        typer.secho("Nothing to change: pass --front and/or --back.", fg="yellow")
        raise typer.Exit(2)
    with _reporting_errors():
        service = _context(ctx).service
        service.edit_card(service.get_deck(deck), index - 1, front=front, back=back)
    typer.secho(f"Updated card #{index}.", fg="green")


@app.command("delete-card")
def delete_card(
    ctx: typer.Context,
    deck: Annotated[str, typer.Argument(help="Deck holding the card.")],
    index: Annotated[int, typer.Argument(help="Card number as shown by 'recall cards'.")],
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Delete without offering to undo.")
    ] = False,
):
    """Remove a card from a deck, with a chance to undo."""
    with _reporting_errors():
        service = _context(ctx).service
        target = service.get_deck(deck)
        card = service.delete_card(target, index - 1)
        typer.secho(f"Deleted card #{index} ({card.front}).", fg="green")

        if not yes and typer.confirm("Undo?", default=False):
            service.undo_delete(target)
            typer.secho(f"Restored '{card.front}' as card #1.", fg="green")


# ---------------------------------------------------------------------------
# Review
# ---------------------------------------------------------------------------


def _prompt_rating() -> Quality | None:
    """Ask until a rating or quit is entered. Returns None on quit."""
    while True:
        answer = typer.prompt("Rate: [a]gain / [g]ood / [e]asy / [q]uit").strip().lower()
        if answer in QUIT_KEYS:
            return None
        if answer in RATING_KEYS:
            return RATING_KEYS[answer]
        typer.secho(f"Unknown rating '{answer}'.", fg="yellow")


@app.command("review")
def review(
    ctx: typer.Context,
    deck: Annotated[str, typer.Argument(help="Deck to review.")],
):
    """Review the cards of a deck that are due now."""
    with _reporting_errors():
        service = _context(ctx).service
        target = service.get_deck(deck)
        session = service.start_review(target)

        if session.is_complete:
            typer.echo("No cards due.")
            return

        while session.state is SessionState.ACTIVE:
            card = session.current
            typer.echo(f"\n[{session.position + 1}/{session.total}] {card.front}")
            typer.prompt("Press Enter to show the answer", default="", show_default=False)
            session.reveal()
            typer.secho(card.back, fg="cyan")

            quality = _prompt_rating()
            if quality is None:
                session.abort()
                break
            session.advance(quality)

        service.save_all()

    reviewed = session.position
    if session.is_complete:
        typer.secho(f"Session complete: {reviewed} card(s) reviewed.", fg="green")
    else:
        typer.echo(f"Stopped after {reviewed} of {session.total} card(s).")


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show(ctx: typer.Context):
    """Display final resolved configuration."""
    obj = ctx.obj or {}
    config = resolve_config({"data_dir": obj.get("data_dir"), "verbose": obj.get("verbose")})
    d = {k: str(v) if isinstance(v, Path) else v for k, v in config.model_dump().items()}
    typer.echo(json.dumps(d, indent=2))
