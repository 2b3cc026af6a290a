"""Tests for lineedit.line_buffer.LineBuffer."""

from __future__ import annotations

import pytest

from lineedit.line_buffer import LineBuffer
from lineedit.utils import grapheme_boundaries

THUMBS_UP = "\U0001F44D\U0001F3FD"  # thumbs up + medium skin tone, one cluster
FLAG_US = "\U0001F1FA\U0001F1F8"  # regional indicators U + S
E_ACUTE = "e\u0301"  # e + combining acute accent
SMILE = "\U0001F642"
RI_U = "\U0001F1FA"
RI_S = "\U0001F1F8"
ZWJ = "\u200d"
MAN = "\U0001F468"
WOMAN = "\U0001F469"
CHOSEONG_KIYEOK = "\u1100"
JUNGSEONG_A = "\u1161"


def buffer_at(text: str, point: int) -> LineBuffer:
    buf = LineBuffer(text)
    buf.insertion_point = point
    return buf


class TestInitialState:
    def test_new_buffer_is_empty(self) -> None:
        buf = LineBuffer()
        assert buf.text == ""
        assert buf.insertion_point == 0
        assert buf.is_empty()
        assert len(buf) == 0

    def test_initial_text_keeps_cursor_at_start(self) -> None:
        buf = LineBuffer("abc")
        assert str(buf) == "abc"
        assert buf.insertion_point == 0

    def test_line_breaks_are_dropped(self) -> None:
        assert LineBuffer("a\r\nb\nc").text == "abc"


class TestInsertion:
    """insert() and insert_at_cursor()."""

    def test_insert_does_not_move_cursor(self) -> None:
        buf = LineBuffer()
        buf.insert(0, "a")
        assert buf.text == "a"
        assert buf.insertion_point == 0

    def test_insert_before_cursor_shifts_cursor(self) -> None:
        buf = buffer_at("bc", 2)
        buf.insert(0, "a")
        assert buf.text == "abc"
        assert buf.insertion_point == 3

    def test_insert_at_cursor_advances_one_grapheme(self) -> None:
        buf = LineBuffer()
        buf.insert_at_cursor("a")
        buf.insert_at_cursor(THUMBS_UP)
        assert buf.text == "a" + THUMBS_UP
        assert buf.insertion_point == 1 + len(THUMBS_UP)
        assert buf.grapheme_index == 2

    def test_insert_in_middle(self) -> None:
        buf = buffer_at("ac", 1)
        buf.insert_at_cursor("b")
        assert buf.text == "abc"
        assert buf.insertion_point == 2

    def test_combining_mark_typed_separately_joins_previous_cluster(self) -> None:
        buf = LineBuffer()
        buf.insert_at_cursor("e")
        buf.insert_at_cursor("\u0301")
        assert buf.text == E_ACUTE
        assert buf.insertion_point == 2
        assert buf.graphemes() == [E_ACUTE]

    def test_regional_indicators_typed_separately_form_one_flag(self) -> None:
        buf = LineBuffer()
        buf.insert_at_cursor("\U0001F1FA")
        buf.insert_at_cursor("\U0001F1F8")
        assert buf.text == FLAG_US
        assert buf.insertion_point == 2
        assert buf.grapheme_index == 1

    def test_every_insertion_leaves_cursor_on_boundary(self) -> None:
        buf = LineBuffer()
        pieces = ["a", THUMBS_UP, "e", "\u0301", FLAG_US, "日", " ", SMILE, "z"]
        for piece in pieces:
            buf.insert_at_cursor(piece)
            assert buf.is_boundary(buf.insertion_point)
        buf.move_to_start()
        buf.move_cursor_forward()
        for piece in pieces:
            buf.insert_at_cursor(piece)
            assert buf.is_boundary(buf.insertion_point)

    def test_insert_out_of_range_raises(self) -> None:
        buf = LineBuffer("abc")
        with pytest.raises(IndexError):
            buf.insert(4, "x")
        with pytest.raises(IndexError):
            buf.insert(-1, "x")

    def test_insert_inside_cluster_raises(self) -> None:
        buf = LineBuffer(E_ACUTE)
        with pytest.raises(ValueError):
            buf.insert(1, "x")

    def test_setting_non_boundary_insertion_point_raises(self) -> None:
        buf = LineBuffer(THUMBS_UP)
        with pytest.raises(ValueError):
            buf.insertion_point = 1

    def test_insert_before_cursor_keeps_cursor_on_boundary(self) -> None:
        buf = buffer_at(RI_U + RI_S + RI_U, 2)
        buf.insert(0, RI_U)
        # Regional indicators pair up again from the start of the line
        assert buf.graphemes() == [RI_U + RI_U, RI_S + RI_U]
        assert buf.insertion_point == 2


class TestRemoval:
    """remove_at(), delete_backward(), delete_forward()."""

    def test_backspace_then_delete_scenario(self) -> None:
        buf = buffer_at("abc", 1)
        assert buf.delete_backward() == "a"
        assert buf.text == "bc"
        assert buf.insertion_point == 0
        assert buf.delete_forward() == "b"
        assert buf.text == "c"
        assert buf.insertion_point == 0

    def test_backspace_at_end_removes_last_grapheme(self) -> None:
        buf = buffer_at("ab" + THUMBS_UP, 2 + len(THUMBS_UP))
        assert buf.delete_backward() == THUMBS_UP
        assert buf.text == "ab"
        assert buf.insertion_point == 2

    def test_backspace_removes_whole_combining_cluster(self) -> None:
        buf = buffer_at("x" + E_ACUTE, 3)
        assert buf.delete_backward() == E_ACUTE
        assert buf.text == "x"

    def test_delete_removes_whole_flag(self) -> None:
        buf = buffer_at(FLAG_US + "!", 0)
        assert buf.delete_forward() == FLAG_US
        assert buf.text == "!"
        assert buf.insertion_point == 0

    def test_backspace_at_start_is_noop(self) -> None:
        buf = buffer_at("abc", 0)
        assert buf.delete_backward() == ""
        assert buf.text == "abc"

    def test_delete_at_end_is_noop(self) -> None:
        buf = buffer_at("abc", 3)
        assert buf.delete_forward() == ""
        assert buf.text == "abc"

    def test_deletes_on_empty_buffer_are_noops(self) -> None:
        buf = LineBuffer()
        assert buf.delete_backward() == ""
        assert buf.delete_forward() == ""

    def test_remove_at_on_empty_buffer_raises(self) -> None:
        with pytest.raises(IndexError):
            LineBuffer().remove_at(0)

    def test_remove_at_behind_cursor_shifts_cursor(self) -> None:
        buf = buffer_at("abcd", 4)
        assert buf.remove_at(1) == "b"
        assert buf.text == "acd"
        assert buf.insertion_point == 3

    def test_backspace_joining_neighbours_into_flag(self) -> None:
        buf = buffer_at(RI_U + "a" + RI_S, 2)
        assert buf.delete_backward() == "a"
        assert buf.text == FLAG_US
        assert buf.insertion_point == 0

    def test_delete_joining_neighbours_into_flag(self) -> None:
        buf = buffer_at(RI_U + "a" + RI_S, 1)
        assert buf.delete_forward() == "a"
        assert buf.text == FLAG_US
        assert buf.insertion_point == 0

    def test_backspace_joining_hangul_jamo(self) -> None:
        buf = buffer_at(CHOSEONG_KIYEOK + "x" + JUNGSEONG_A, 2)
        assert buf.delete_backward() == "x"
        assert buf.graphemes() == [CHOSEONG_KIYEOK + JUNGSEONG_A]
        assert buf.insertion_point == 0

    @pytest.mark.parametrize("grapheme", ["x", THUMBS_UP, E_ACUTE, FLAG_US, "日"])
    @pytest.mark.parametrize("point", [0, 1, 2])
    def test_insert_then_delete_restores_buffer(self, grapheme: str, point: int) -> None:
        buf = buffer_at("ab", point)
        buf.insert_at_cursor(grapheme)
        buf.delete_backward()
        assert buf.text == "ab"
        assert buf.insertion_point == point


class TestCursorMotion:
    def test_forward_and_back_step_over_clusters(self) -> None:
        text = "a" + THUMBS_UP + E_ACUTE + FLAG_US + "z"
        buf = LineBuffer(text)
        stops = [buf.insertion_point]
        while buf.insertion_point < len(text):
            stops.append(buf.move_cursor_forward())
        assert stops == [0, 1, 3, 5, 7, 8]

        back = [buf.insertion_point]
        while buf.insertion_point > 0:
            back.append(buf.move_cursor_back())
        assert back == list(reversed(stops))

    def test_forward_then_back_returns_to_start_point(self) -> None:
        text = "a" + THUMBS_UP + E_ACUTE + FLAG_US + "z"
        walker = LineBuffer(text)
        boundaries = [0]
        while walker.insertion_point < len(text):
            boundaries.append(walker.move_cursor_forward())
        for point in boundaries[:-1]:
            buf = buffer_at(text, point)
            buf.move_cursor_forward()
            buf.move_cursor_back()
            assert buf.insertion_point == point

    def test_motion_is_clamped(self) -> None:
        buf = buffer_at("ab", 0)
        assert buf.move_cursor_back() == 0
        buf.move_to_end()
        assert buf.move_cursor_forward() == 2

    def test_home_and_end(self) -> None:
        buf = buffer_at("hello", 2)
        assert buf.move_to_end() == 5
        assert buf.move_to_start() == 0

    def test_column_uses_display_width(self) -> None:
        buf = LineBuffer("a" + THUMBS_UP + "日" + E_ACUTE)
        buf.move_to_end()
        assert buf.column == 1 + 2 + 2 + 1
        assert buf.grapheme_index == 4


class TestWordMotion:
    """Words are maximal runs of alphabetic graphemes."""

    def test_foo_bar_left(self) -> None:
        buf = buffer_at("foo bar", 7)
        assert buf.move_word_left() == 4
        assert buf.move_word_left() == 0
        assert buf.move_word_left() == 0

    def test_foo_bar_right(self) -> None:
        buf = buffer_at("foo bar", 0)
        assert buf.move_word_right() == 4
        assert buf.move_word_right() == 7
        assert buf.move_word_right() == 7

    def test_left_from_inside_word_lands_on_its_start(self) -> None:
        buf = buffer_at("foo barbaz", 6)
        assert buf.move_word_left() == 4

    def test_apostrophe_splits_contraction(self) -> None:
        buf = buffer_at("don't stop", 10)
        assert buf.move_word_left() == 6
        assert buf.move_word_left() == 4
        assert buf.move_word_left() == 0

        assert buf.move_word_right() == 4
        assert buf.move_word_right() == 6
        assert buf.move_word_right() == 10

    def test_emoji_separates_words(self) -> None:
        text = "he" + SMILE + "llo"
        buf = buffer_at(text, len(text))
        assert buf.move_word_left() == 3
        assert buf.move_word_left() == 0

    def test_punctuation_and_digits_are_skipped(self) -> None:
        buf = buffer_at("(foo), 42 bar!", 0)
        assert buf.move_word_right() == 1
        assert buf.move_word_right() == 10
        assert buf.move_word_right() == 14

    def test_accented_letters_belong_to_words(self) -> None:
        text = "caf" + E_ACUTE + " ol" + E_ACUTE
        buf = buffer_at(text, len(text))
        assert buf.move_word_left() == 6
        assert buf.move_word_left() == 0

    def test_only_separators(self) -> None:
        buf = buffer_at("  ... ", 3)
        assert buf.move_word_left() == 0
        assert buf.move_word_right() == 6


class TestTruncation:
    def test_truncate_to_cursor(self) -> None:
        buf = buffer_at("hello world", 5)
        assert buf.truncate_to_cursor() == " world"
        assert buf.text == "hello"
        assert buf.insertion_point == 5

    def test_truncate_at_end_is_noop(self) -> None:
        buf = buffer_at("hello", 5)
        assert buf.truncate_to_cursor() == ""
        assert buf.text == "hello"

    def test_truncate_before_cursor(self) -> None:
        buf = buffer_at("hello world", 6)
        assert buf.truncate_before_cursor() == "hello "
        assert buf.text == "world"
        assert buf.insertion_point == 0

    def test_delete_word_backward(self) -> None:
        buf = buffer_at("foo bar  ", 9)
        assert buf.delete_word_backward() == "bar  "
        assert buf.text == "foo "
        assert buf.insertion_point == 4

    def test_delete_word_backward_joining_neighbours_into_flag(self) -> None:
        buf = buffer_at(RI_U + "ab" + RI_S, 3)
        assert buf.delete_word_backward() == "ab"
        assert buf.text == FLAG_US
        assert buf.insertion_point == 0


class TestWholesale:
    def test_replace_all_resets_cursor(self) -> None:
        buf = buffer_at("old text", 8)
        buf.replace_all("new")
        assert buf.text == "new"
        assert buf.insertion_point == 0
        assert buf.move_to_end() == 3

    def test_replace_all_strips_line_breaks(self) -> None:
        buf = LineBuffer()
        buf.replace_all("a\nb")
        assert buf.text == "ab"

    def test_clear(self) -> None:
        buf = buffer_at("abc", 2)
        buf.clear()
        assert buf.is_empty()
        assert buf.insertion_point == 0


MERGING_TEXTS = [
    RI_U + "a" + RI_S,
    RI_U + "ab" + RI_S + "c d",
    MAN + ZWJ + "x" + WOMAN,
    CHOSEONG_KIYEOK + "x" + JUNGSEONG_A,
    "a" + E_ACUTE + THUMBS_UP + FLAG_US + " z",
]

OPERATIONS = {
    "delete_backward": LineBuffer.delete_backward,
    "delete_forward": LineBuffer.delete_forward,
    "delete_word_backward": LineBuffer.delete_word_backward,
    "truncate_to_cursor": LineBuffer.truncate_to_cursor,
    "truncate_before_cursor": LineBuffer.truncate_before_cursor,
    "remove_at_cursor": lambda buf: buf.remove_at(buf.insertion_point) if buf.insertion_point < len(buf) else "",
    "insert_at_start": lambda buf: buf.insert(0, RI_U),
    "insert_at_cursor": lambda buf: buf.insert_at_cursor(RI_S),
    "replace_all": lambda buf: buf.replace_all(RI_S + "q" + RI_U),
}


class TestBoundaryInvariant:
    """The insertion point lands on a cluster boundary after every edit."""

    @pytest.mark.parametrize("text", MERGING_TEXTS)
    @pytest.mark.parametrize("operation", list(OPERATIONS), ids=str)
    def test_cursor_stays_on_boundary(self, text: str, operation: str) -> None:
        for point in grapheme_boundaries(text):
            buf = buffer_at(text, point)
            OPERATIONS[operation](buf)
            assert buf.is_boundary(buf.insertion_point), (text, point, buf)

    @pytest.mark.parametrize("text", MERGING_TEXTS)
    def test_repeated_backspace_empties_line(self, text: str) -> None:
        buf = buffer_at(text, len(text))
        while not buf.is_empty():
            before = len(buf)
            buf.move_to_end()
            buf.delete_backward()
            assert len(buf) < before
            assert buf.is_boundary(buf.insertion_point)
