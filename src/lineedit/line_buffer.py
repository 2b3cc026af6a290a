"""Line buffer - the text of one input line and its insertion point.

The buffer knows nothing about terminals. Offsets are indexes into the
Python string (code points), but every public operation keeps the
insertion point on a grapheme-cluster boundary, so a flag emoji or an
``e`` followed by a combining accent is stepped over, deleted and inserted
as a single unit.
"""

from __future__ import annotations

from lineedit.utils import grapheme_boundaries, is_word_grapheme, segment, visible_width


class LineBuffer:
    """Editable single line of text with a grapheme-aware cursor."""

    def __init__(self, text: str = "") -> None:
        self._text: str = _strip_line_breaks(text)
        self._insertion_point: int = 0

    # -- state --------------------------------------------------------------

    @property
    def text(self) -> str:
        return self._text

    @property
    def insertion_point(self) -> int:
        return self._insertion_point

    @insertion_point.setter
    def insertion_point(self, point: int) -> None:
        self._check_boundary(point)
        self._insertion_point = point

    def __len__(self) -> int:
        return len(self._text)

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"LineBuffer({self._text!r}, insertion_point={self._insertion_point})"

    def is_empty(self) -> bool:
        return not self._text

    # -- conversion layer ---------------------------------------------------

    def graphemes(self) -> list[str]:
        """Return the buffer split into grapheme clusters."""
        return segment(self._text)

    @property
    def grapheme_index(self) -> int:
        """Number of grapheme clusters before the insertion point."""
        return len(segment(self._text[: self._insertion_point]))

    @property
    def column(self) -> int:
        """Display width of the text before the insertion point."""
        return visible_width(self._text[: self._insertion_point])

    def is_boundary(self, point: int) -> bool:
        return point in grapheme_boundaries(self._text)

    # -- insertion ----------------------------------------------------------

    def insert(self, point: int, text: str) -> None:
        """Insert *text* at *point* without moving the insertion point.

        Raises ``IndexError`` when *point* is outside the buffer and
        ``ValueError`` when it would split a grapheme cluster. If the new
        text merges with its neighbours, an insertion point that ends up
        inside the merged cluster moves back to the cluster start.
        """
        self._check_boundary(point)
        text = _strip_line_breaks(text)
        self._text = self._text[:point] + text + self._text[point:]
        if point < self._insertion_point:
            self._insertion_point += len(text)
        self._snap_to_boundary()

    def insert_at_cursor(self, text: str) -> None:
        """Insert *text* grapheme by grapheme, advancing past each one."""
        for g in segment(_strip_line_breaks(text)):
            self.insert(self._insertion_point, g)
            self.move_cursor_forward()

    # -- removal ------------------------------------------------------------

    def remove_at(self, point: int, backward: bool = False) -> str:
        """Remove one grapheme cluster next to *point* and return it.

        With ``backward=False`` the cluster starting at *point* is removed
        (delete); with ``backward=True`` the cluster ending at *point*
        (backspace). Callers check :meth:`is_empty` first.
        """
        if not self._text:
            raise IndexError("remove from empty line buffer")
        self._check_boundary(point)
        bounds = grapheme_boundaries(self._text)
        idx = bounds.index(point)
        if backward:
            if idx == 0:
                raise IndexError("no grapheme before offset 0")
            start, end = bounds[idx - 1], point
        else:
            if idx == len(bounds) - 1:
                raise IndexError("no grapheme after end of line")
            start, end = point, bounds[idx + 1]

        removed = self._text[start:end]
        self._text = self._text[:start] + self._text[end:]
        if self._insertion_point >= end:
            self._insertion_point -= end - start
        elif self._insertion_point > start:
            self._insertion_point = start
        self._snap_to_boundary()
        return removed

    def delete_backward(self) -> str:
        """Backspace: remove the cluster before the cursor."""
        if self.is_empty() or self._insertion_point == 0:
            return ""
        return self.remove_at(self._insertion_point, backward=True)

    def delete_forward(self) -> str:
        """Delete: remove the cluster under the cursor."""
        if self.is_empty() or self._insertion_point >= len(self._text):
            return ""
        return self.remove_at(self._insertion_point)

    def truncate_to_cursor(self) -> str:
        """Delete everything from the cursor to the end of the line."""
        removed = self._text[self._insertion_point :]
        self._text = self._text[: self._insertion_point]
        return removed

    def truncate_before_cursor(self) -> str:
        """Delete everything from the start of the line to the cursor."""
        removed = self._text[: self._insertion_point]
        self._text = self._text[self._insertion_point :]
        self._insertion_point = 0
        return removed

    def delete_word_backward(self) -> str:
        """Delete from the start of the previous word up to the cursor."""
        end = self._insertion_point
        start = self.move_word_left()
        removed = self._text[start:end]
        self._text = self._text[:start] + self._text[end:]
        self._snap_to_boundary()
        return removed

    # -- cursor motion ------------------------------------------------------

    def move_cursor_forward(self) -> int:
        """Move to the next grapheme boundary; no-op at the end."""
        for bound in grapheme_boundaries(self._text):
            if bound > self._insertion_point:
                self._insertion_point = bound
                break
        return self._insertion_point

    def move_cursor_back(self) -> int:
        """Move to the previous grapheme boundary; no-op at the start."""
        previous = 0
        for bound in grapheme_boundaries(self._text):
            if bound >= self._insertion_point:
                break
            previous = bound
        self._insertion_point = previous
        return self._insertion_point

    def move_to_start(self) -> int:
        self._insertion_point = 0
        return 0

    def move_to_end(self) -> int:
        self._insertion_point = len(self._text)
        return self._insertion_point

    def move_word_left(self) -> int:
        """Move to the start of the word left of the cursor.

        Separators (anything that is not an alphabetic run) are skipped,
        never landed on. Without a preceding word the cursor goes to 0.
        """
        graphemes = segment(self._text[: self._insertion_point])
        point = self._insertion_point

        # Skip trailing separators
        while graphemes and not is_word_grapheme(graphemes[-1]):
            point -= len(graphemes.pop())

        while graphemes and is_word_grapheme(graphemes[-1]):
            point -= len(graphemes.pop())

        self._insertion_point = point
        return point

    def move_word_right(self) -> int:
        """Move to the start of the next word, or to the end of the line."""
        graphemes = segment(self._text[self._insertion_point :])
        point = self._insertion_point
        idx = 0

        # Finish the word the cursor is in
        while idx < len(graphemes) and is_word_grapheme(graphemes[idx]):
            point += len(graphemes[idx])
            idx += 1

        while idx < len(graphemes) and not is_word_grapheme(graphemes[idx]):
            point += len(graphemes[idx])
            idx += 1

        self._insertion_point = point
        return point

    # -- wholesale ----------------------------------------------------------

    def replace_all(self, new_text: str) -> None:
        """Replace the whole line; the insertion point goes back to 0."""
        self._text = _strip_line_breaks(new_text)
        self._insertion_point = 0

    def clear(self) -> None:
        self._text = ""
        self._insertion_point = 0

    # -- internals ----------------------------------------------------------

    def _check_boundary(self, point: int) -> None:
        if not 0 <= point <= len(self._text):
            raise IndexError(f"offset {point} outside line of length {len(self._text)}")
        if not self.is_boundary(point):
            raise ValueError(f"offset {point} splits a grapheme cluster")

    def _snap_to_boundary(self) -> None:
        # Text joined around an edit can merge into one cluster
        previous = 0
        for bound in grapheme_boundaries(self._text):
            if bound > self._insertion_point:
                break
            previous = bound
        self._insertion_point = previous


def _strip_line_breaks(text: str) -> str:
    return text.replace("\r\n", "").replace("\r", "").replace("\n", "")
