"""Explicit state container for one article view.

WHY: The view tracks the loaded article, the current selection and whether
a format request is running. Keeping these in one object per view (instead
of module globals) makes transitions explicit and lets tests build a fresh
view without leaking state.

HOW: Two small state machines share one dataclass:
  LoadStatus      idle → loading → loaded | error (reload allowed)
  SelectionPhase  idle → selecting → formatting → idle
Transition methods check the current state and raise InvalidTransition on
an illegal move.

RULES:
- format_enabled is True only with non-empty selected_text and no request in flight
- The formatting flag and the FORMATTING phase always agree
- selection_preview truncates to 30 characters plus "..."
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

from wiki_highlighter.core.models import Article

PREVIEW_MAX_CHARS = 30


class InvalidTransition(RuntimeError):
    """Raised when a state change is not allowed from the current state."""


class LoadStatus(str, enum.Enum):
    """Article loading states."""

    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


class SelectionPhase(str, enum.Enum):
    """Selection / formatting states."""

    IDLE = "idle"
    SELECTING = "selecting"
    FORMATTING = "formatting"


@dataclass
class ViewState:
    """Mutable state of a single article view."""

    load_status: LoadStatus = LoadStatus.IDLE
    phase: SelectionPhase = SelectionPhase.IDLE
    article: Optional[Article] = None
    selected_text: str = ""
    error: str = ""

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def formatting(self) -> bool:
        return self.phase is SelectionPhase.FORMATTING

    @property
    def format_enabled(self) -> bool:
        return bool(self.selected_text) and not self.formatting

    @property
    def selection_preview(self) -> str:
        """Indicator text for the current selection, "" when nothing is selected."""
        if not self.selected_text:
            return ""
        preview = self.selected_text
        if len(preview) > PREVIEW_MAX_CHARS:
            preview = preview[:PREVIEW_MAX_CHARS] + "..."
        return 'Selected: "{}"'.format(preview)

    # ------------------------------------------------------------------
    # Load transitions
    # ------------------------------------------------------------------

    def start_loading(self) -> None:
        if self.load_status is LoadStatus.LOADING:
            raise InvalidTransition("article is already loading")
        self.load_status = LoadStatus.LOADING
        self.error = ""

    def finish_loading(self, article: Article) -> None:
        if self.load_status is not LoadStatus.LOADING:
            raise InvalidTransition("cannot finish loading from {}".format(self.load_status.value))
        self.load_status = LoadStatus.LOADED
        self.article = article

    def fail_loading(self, message: str) -> None:
        if self.load_status is not LoadStatus.LOADING:
            raise InvalidTransition("cannot fail loading from {}".format(self.load_status.value))
        self.load_status = LoadStatus.ERROR
        self.article = None
        self.error = message

    # ------------------------------------------------------------------
    # Selection transitions
    # ------------------------------------------------------------------

    def update_selection(self, text: str) -> None:
        """Record the latest selection text; "" clears it.

        While a format request is running the phase stays FORMATTING; the
        text is still tracked so the control re-enables once it finishes.
        """
        self.selected_text = text
        if self.formatting:
            return
        self.phase = SelectionPhase.SELECTING if text else SelectionPhase.IDLE

    def start_formatting(self) -> None:
        if self.formatting:
            raise InvalidTransition("a format request is already in flight")
        if not self.selected_text:
            raise InvalidTransition("nothing is selected")
        self.phase = SelectionPhase.FORMATTING
        self.error = ""

    def finish_formatting(self) -> None:
        if not self.formatting:
            raise InvalidTransition("no format request is in flight")
        self.phase = SelectionPhase.SELECTING if self.selected_text else SelectionPhase.IDLE

    def clear_selection(self) -> None:
        self.selected_text = ""
        if not self.formatting:
            self.phase = SelectionPhase.IDLE
