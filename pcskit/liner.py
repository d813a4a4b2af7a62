"""Interactive line reading with a history file."""

import sys

_CLEAR_SEQUENCE = "\x1b[H\x1b[2J"


def clear_screen(stream=None):
    """Clear the terminal by writing the ANSI home-and-erase sequence."""
    out = sys.stdout if stream is None else stream
    out.write(_CLEAR_SEQUENCE)
    out.flush()


class LineHistory:
    """A history file, opened for reading and writing and created if missing."""

    def __init__(self, file_path):
        self.file_path = file_path
        self._file = open(file_path, "a+", encoding="utf-8")

    def read(self):
        """Return the non-empty lines stored in the file."""
        self._file.seek(0)
        return [line for line in self._file.read().splitlines() if line]

    def write(self, lines):
        """Replace the file's contents with ``lines``."""
        self._file.seek(0)
        self._file.truncate()
        self._file.writelines(f"{line}\n" for line in lines)
        self._file.flush()

    def close(self):
        self._file.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


class Liner:
    """Reads lines from the user and keeps them as history.

    Ctrl+C raises KeyboardInterrupt and end of input raises EOFError.
    """

    def __init__(self, history=None):
        self.history = history
        self.history_lines = history.read() if history is not None else []
        self._paused = False

    def prompt(self, text):
        """Show ``text`` and return the line the user enters."""
        line = input(text)
        if line:
            self.history_lines.append(line)
        return line

    def _write_history(self):
        if self.history is None:
            raise RuntimeError("history not set")
        self.history.write(self.history_lines)

    def pause(self):
        """Suspend line reading and save the history."""
        if self._paused:
            raise RuntimeError("liner already paused")
        self._paused = True
        try:
            self._write_history()
        except (RuntimeError, OSError):
            pass

    def resume(self):
        """Resume line reading after a pause."""
        if not self._paused:
            raise RuntimeError("liner is not paused")
        self._paused = False

    @property
    def paused(self):
        return self._paused

    def close(self):
        if self.history is not None:
            self.history.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()