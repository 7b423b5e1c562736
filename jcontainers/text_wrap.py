"""Break text into lines of nearly equal length."""

from __future__ import annotations

from collections.abc import Iterator

_BLANKS = frozenset(
    {
        0x20, 0xA0, 0x0A, 0x0D, 0x09, 0x08, 0x0C,
        0x2000, 0x2001, 0x2003, 0x2004, 0x2005, 0x2006, 0x2007,
        0x2008, 0x2009, 0x200A, 0x200B,
        0x202F, 0x205F,
        0x3000, 0xFEFF,
    }
)

_MAX_ROUNDS = 40
_EPSILON = 0.00001


def is_blank_or_space(char: str) -> bool:
    """Return True if the single character is treated as a word break."""
    return ord(char) in _BLANKS


def _split_words(text: str) -> list[str]:
    """Split on every blank character, keeping empty tokens between adjacent blanks."""
    return list(_tokens(text))


def _tokens(text: str) -> Iterator[str]:
    start = 0
    for pos, char in enumerate(text):
        if is_blank_or_space(char):
            yield text[start:pos]
            start = pos + 1
    yield text[start:]


def _characters_per_line(total: int, max_chars_per_line: int) -> float:
    return total / (1.0 + total / max_chars_per_line)


def _line_char_count(words: list[str]) -> int:
    return sum(len(word) for word in words) + max(len(words) - 1, 0)


class _LineSet:
    def __init__(self) -> None:
        self.lines: list[list[str]] = []

    def char_count(self) -> int:
        return sum(_line_char_count(words) for words in self.lines)

    def average(self) -> float:
        return self.char_count() / len(self.lines)

    def mean_square(self) -> float:
        avg = self.average()
        total = sum((_line_char_count(words) - avg) ** 2 for words in self.lines)
        return total / len(self.lines)

    def char_diff_in(self, index: int) -> float:
        return _line_char_count(self.lines[index]) - self.average()

    def lengthen(self, index: int) -> None:
        """Move the last word of the previous line to the front of this one."""
        if index == 0:
            if len(self.lines) >= 2:
                self.shorten(1)
            return
        source = self.lines[index - 1]
        if source:
            self.lines[index].insert(0, source.pop())

    def shorten(self, index: int) -> None:
        """Move the first word of this line to the end of the previous one."""
        if index == 0:
            if len(self.lines) >= 2:
                self.lengthen(1)
            return
        source = self.lines[index]
        if source:
            self.lines[index - 1].append(source.pop(0))

    def adjust(self, index: int, lengthen: bool) -> None:
        if lengthen:
            self.lengthen(index)
        else:
            self.shorten(index)

    def rendered(self) -> list[str]:
        return ["".join(word + " " for word in words) for words in self.lines]


def _char_at(data: str, index: int) -> str:
    return data[index] if index < len(data) else "\0"


def _initial_set(data: str, chars_per_line: int) -> _LineSet:
    cpl = _characters_per_line(len(data), chars_per_line)
    result = _LineSet()
    end = len(data)
    first = 0

    while first != end:
        if end - first >= cpl:
            middle = first + int(cpl)
            left = right = middle
            while left > first and not is_blank_or_space(_char_at(data, left)):
                left -= 1
            while right < end and not is_blank_or_space(_char_at(data, right)):
                right += 1
            if left != first and middle - left < (right - middle) * 1.2:
                selected = left
            else:
                selected = right
            # Always make progress, even when the break lands on the start.
            if selected == first:
                selected = first + 1
        else:
            selected = end
        result.lines.append(_split_words(data[first:selected]))
        first = selected

    return result


def wrap_string(source: str | bytes, chars_per_line: int) -> list[str]:
    """Break ``source`` into lines of roughly equal length.

    Each returned line is its words, each followed by a single space.
    Raises ValueError for a non-positive line width or bytes that are not UTF-8.
    """
    if not isinstance(source, (str, bytes)):
        raise TypeError("source must be str or bytes")
    if chars_per_line <= 0:
        raise ValueError("chars_per_line must be positive")

    if isinstance(source, bytes):
        try:
            text = source.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ValueError("source is not valid UTF-8") from exc
    else:
        text = source

    if not text:
        return []

    line_set = _initial_set(text, chars_per_line)

    for _ in range(_MAX_ROUNDS):
        round_start = line_set.mean_square()

        for index in range(len(line_set.lines)):
            lengthen = line_set.char_diff_in(index) < 0
            before = line_set.mean_square()
            line_set.adjust(index, lengthen)
            if line_set.mean_square() > before:
                line_set.adjust(index, not lengthen)

        if abs(round_start - line_set.mean_square()) < _EPSILON:
            break

    return line_set.rendered()