"""Tests for path suggestions and their pagination."""

import os

import pytest

from den.state import SuggestionState
from den.tools.suggest import split_partial, suggest


@pytest.fixture
def tree(temp_dir):
    for name in ["alpha", "Beta", "bravo", ".hidden", ".config"]:
        (temp_dir / name).mkdir()
    (temp_dir / "bfile.txt").write_text("not a directory\n")
    return temp_dir


def test_trailing_separator_lists_directory(tree):
    """Test that a path ending in a separator lists that directory."""
    results = suggest(str(tree) + os.sep)

    assert sorted(results) == sorted(
        str(tree / name) + os.sep for name in ["alpha", "Beta", "bravo"]
    )


def test_hidden_directories_excluded(tree):
    """Test that dot-directories are hidden unless asked for."""
    hidden = {str(tree / ".hidden") + os.sep, str(tree / ".config") + os.sep}

    assert not hidden & set(suggest(str(tree) + os.sep))
    assert hidden <= set(suggest(str(tree) + os.sep, show_hidden=True))


def test_prefix_is_case_insensitive(tree):
    """Test that the last segment filters by case-insensitive prefix."""
    results = suggest(str(tree / "b"))

    assert sorted(results) == sorted([str(tree / "Beta") + os.sep, str(tree / "bravo") + os.sep])


def test_files_never_suggested(tree):
    """Test that regular files are left out."""
    results = suggest(str(tree / "bf"))

    assert results == []


def test_missing_directory_gives_nothing(temp_dir):
    """Test that an unreadable directory yields no suggestions."""
    assert suggest(str(temp_dir / "missing" / "x")) == []


def test_empty_input_lists_root():
    """Test that an empty input lists the filesystem root."""
    assert split_partial("") == (os.sep, "")
    assert all(path.startswith(os.sep) and path.endswith(os.sep) for path in suggest(""))


def test_home_is_expanded(monkeypatch, tree):
    """Test that ~ expands to the home directory."""
    monkeypatch.setenv("HOME", str(tree))

    assert str(tree / "alpha") + os.sep in suggest("~/al")


def make_state(count, page_size=10):
    return SuggestionState(suggestions=[f"/p{i}/" for i in range(count)], page_size=page_size)


def assert_on_page(state):
    assert state.page_start <= state.index < state.page_end


def test_page_count():
    """Test page count rounding."""
    assert make_state(0).page_count == 0
    assert make_state(10).page_count == 1
    assert make_state(23).page_count == 3


def test_move_wraps_within_page():
    """Test that moving past a page edge wraps to the other edge of the same page."""
    state = make_state(23)

    state.move(-1)
    assert state.index == 9

    state.move(1)
    assert state.index == 0


def test_move_wraps_on_short_last_page():
    """Test wrapping on a last page with fewer items."""
    state = make_state(23)
    state.turn_page(-1)

    assert state.page == 2
    assert state.index == 20

    state.move(3)
    assert state.index == 20
    state.move(-1)
    assert state.index == 22


def test_turn_page_wraps_and_resets_index():
    """Test that page changes wrap and select the first slot of the page."""
    state = make_state(23)
    state.move(4)

    state.turn_page(1)
    assert (state.page, state.index) == (1, 10)

    state.turn_page(1)
    state.turn_page(1)
    assert (state.page, state.index) == (0, 0)


def test_moves_without_suggestions_are_noops():
    """Test that an empty state stays put."""
    state = make_state(0)

    state.move(1)
    state.turn_page(1)

    assert (state.page, state.index) == (0, 0)
    assert state.current() is None


def test_index_stays_on_current_page():
    """Test the page bound after a long mixed sequence of moves."""
    state = make_state(37, page_size=8)
    moves = [1, 1, -1, "next", 5, -7, "prev", "prev", 3, "next", -1, 9, "next", "next", 1]

    for step in moves:
        if step == "next":
            state.turn_page(1)
        elif step == "prev":
            state.turn_page(-1)
        else:
            state.move(step)
        assert_on_page(state)
        assert state.current() == state.suggestions[state.index]


def test_bare_name_stays_relative(monkeypatch, tree):
    """Test that a name without a directory part completes relative to the working directory."""
    monkeypatch.chdir(tree)

    assert split_partial("al") == ("", "al")
    assert suggest("al") == ["alpha" + os.sep]
    assert sorted(suggest("b")) == ["Beta" + os.sep, "bravo" + os.sep]
