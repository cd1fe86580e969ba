"""Centralized constants for recall.

Scheduling numbers and on-disk names live here so the scheduler, the codec and
the repository agree on a single source of truth.
"""

# ---------- Scheduler ----------
FIRST_GOOD_INTERVAL = 10  # minutes
FIRST_EASY_INTERVAL = 20  # minutes
EASE_BONUS = 0.1
EASE_LINEAR = 0.08
EASE_QUADRATIC = 0.02
EASE_CEILING_GRADE = 5

# ---------- Storage layout ----------
DEFAULT_INDEX_FILE = "decks.md"
DEFAULT_CARDS_DIR = "cards"
CARD_FILE_SUFFIX = ".md"

# ---------- Text format ----------
INDEX_HEADER = "# Decks"
CARDS_HEADER = "# Cards"
DECK_HEADING = "## "
DECK_KEY_FIELD = "- JSON File: "
CARD_HEADING = "### Card"
FRONT_FIELD = "- Front: "
BACK_FIELD = "- Back: "
SCORE_FIELD = "- Score: "
INTERVAL_FIELD = "- Interval: "
EASE_FIELD = "- Ease Factor: "
STATUS_FIELD = "- Status: "
LAST_REVIEWED_FIELD = "- Last Reviewed: "
