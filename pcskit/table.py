"""Plain text tables without borders or separators."""

import enum
import re

from wcwidth import wcswidth

_NUMBER = re.compile(r"^[-+]?\d+(\.\d+)?$")


class Align(enum.IntEnum):
    """Cell alignment; DEFAULT puts numbers right and text left."""

    DEFAULT = 0
    CENTER = 1
    RIGHT = 2
    LEFT = 3


def _width(text):
    width = wcswidth(text)
    return len(text) if width < 0 else width


def _title(name):
    chars = list(name)
    for pos, char in enumerate(chars):
        if char == "_":
            chars[pos] = " "
        elif char == ".":
            before = chars[pos - 1] if pos > 0 else " "
            after = chars[pos + 1] if pos + 1 < len(chars) else " "
            if not (before.isdigit() or before.isspace()) or not (after.isdigit() or after.isspace()):
                chars[pos] = " "
    title = "".join(chars).strip()
    if not title and name:
        title = " "
    return title.upper()


def _pad(text, width, align):
    gap = width - _width(text)
    if align == Align.DEFAULT:
        align = Align.RIGHT if _NUMBER.match(text) else Align.LEFT
    if align == Align.CENTER:
        left = gap // 2
        return " " * left + text + " " * (gap - left)
    if align == Align.RIGHT:
        return " " * gap + text
    return text + " " * gap


class Table:
    """Collects a header and rows, then renders them aligned to a stream."""

    def __init__(self, stream):
        self._stream = stream
        self._header = []
        self._alignments = []
        self._rows = []

    def set_header(self, header):
        self._header = [_title(str(cell)) for cell in header]

    def set_column_alignment(self, alignments):
        self._alignments = [Align(align) for align in alignments]

    def append(self, row):
        self._rows.append([str(cell) for cell in row])

    def _alignment(self, column):
        if column < len(self._alignments):
            return self._alignments[column]
        return Align.DEFAULT

    def render(self):
        """Write the table to the stream."""
        columns = max([len(self._header)] + [len(row) for row in self._rows])
        if columns == 0:
            return

        def split(row):
            cells = list(row) + [""] * (columns - len(row))
            return [cell.split("\n") for cell in cells]

        header = split(self._header) if self._header else None
        rows = [split(row) for row in self._rows]

        widths = [0] * columns
        for row in ([header] if header else []) + rows:
            for column, lines in enumerate(row):
                widths[column] = max([widths[column]] + [_width(line) for line in lines])

        def emit(row, align_for):
            height = max(len(lines) for lines in row)
            for line_no in range(height):
                parts = (
                    _pad(lines[line_no] if line_no < len(lines) else "", width, align_for(column))
                    for column, (lines, width) in enumerate(zip(row, widths))
                )
                self._stream.write("".join(f" {part} " for part in parts) + "\n")

        if header:
            emit(header, lambda column: Align.CENTER)
        for row in rows:
            emit(row, self._alignment)