"""Tests for ViewState transitions and derived values."""

from __future__ import annotations

import pytest

from wiki_highlighter.client.state import (
    InvalidTransition,
    LoadStatus,
    SelectionPhase,
    ViewState,
)
from wiki_highlighter.core.models import Article


class TestLoadTransitions:

    def test_idle_to_loaded(self):
        state = ViewState()
        state.start_loading()
        assert state.load_status is LoadStatus.LOADING
        article = Article(title="T", extract="x")
        state.finish_loading(article)
        assert state.load_status is LoadStatus.LOADED
        assert state.article is article

    def test_failure_clears_article_and_sets_error(self):
        state = ViewState(article=Article(title="Old", extract="old"))
        state.start_loading()
        state.fail_loading("Failed to fetch data from API")
        assert state.load_status is LoadStatus.ERROR
        assert state.article is None
        assert state.error == "Failed to fetch data from API"

    def test_start_loading_clears_previous_error(self):
        state = ViewState(load_status=LoadStatus.ERROR, error="boom")
        state.start_loading()
        assert state.error == ""

    def test_cannot_start_loading_twice(self):
        state = ViewState()
        state.start_loading()
        with pytest.raises(InvalidTransition):
            state.start_loading()

    def test_cannot_finish_without_loading(self):
        with pytest.raises(InvalidTransition):
            ViewState().finish_loading(Article(title="T", extract=""))
        with pytest.raises(InvalidTransition):
            ViewState().fail_loading("nope")


class TestSelectionTransitions:

    def test_selecting_enables_format(self):
        state = ViewState()
        state.update_selection("norway")
        assert state.phase is SelectionPhase.SELECTING
        assert state.format_enabled

    def test_empty_selection_disables_format(self):
        state = ViewState()
        state.update_selection("norway")
        state.update_selection("")
        assert state.phase is SelectionPhase.IDLE
        assert not state.format_enabled

    def test_formatting_disables_format(self):
        state = ViewState()
        state.update_selection("norway")
        state.start_formatting()
        assert state.formatting
        assert not state.format_enabled

    def test_cannot_start_formatting_twice(self):
        state = ViewState()
        state.update_selection("norway")
        state.start_formatting()
        with pytest.raises(InvalidTransition):
            state.start_formatting()

    def test_cannot_format_without_selection(self):
        with pytest.raises(InvalidTransition):
            ViewState().start_formatting()

    def test_selection_during_formatting_keeps_phase(self):
        state = ViewState()
        state.update_selection("norway")
        state.start_formatting()
        state.update_selection("europe")
        assert state.phase is SelectionPhase.FORMATTING
        state.finish_formatting()
        assert state.phase is SelectionPhase.SELECTING
        assert state.selected_text == "europe"

    def test_finish_after_clear_returns_to_idle(self):
        state = ViewState()
        state.update_selection("norway")
        state.start_formatting()
        state.clear_selection()
        state.finish_formatting()
        assert state.phase is SelectionPhase.IDLE
        assert not state.formatting

    def test_finish_without_start_raises(self):
        with pytest.raises(InvalidTransition):
            ViewState().finish_formatting()


class TestSelectionPreview:

    def test_empty(self):
        assert ViewState().selection_preview == ""

    def test_short_text(self):
        state = ViewState(selected_text="norway")
        assert state.selection_preview == 'Selected: "norway"'

    def test_long_text_truncated(self):
        state = ViewState(selected_text="x" * 40)
        assert state.selection_preview == 'Selected: "{}..."'.format("x" * 30)
