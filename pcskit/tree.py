"""Tree view of a remote directory."""

from dataclasses import dataclass

INDENT_PREFIX = "│   "
PATH_PREFIX = "├──"
LAST_FILE_PREFIX = "└──"


@dataclass
class Entry:
    """A file or directory as returned by a directory listing."""

    filename: str
    path: str
    is_dir: bool = False
    fs_id: int = 0


@dataclass
class TreeOptions:
    """How deep to descend (negative for no limit) and whether to show ids."""

    depth: int = -1
    show_fsid: bool = False


def render_tree(path, lister, options=None, depth=0):
    """Yield the lines of the tree under ``path``.

    ``lister`` takes a directory path and returns its entries; its errors
    propagate.
    """
    options = TreeOptions() if options is None else options
    entries = list(lister(path))
    indent = INDENT_PREFIX * depth
    prefix = PATH_PREFIX
    count = len(entries)

    for position, entry in enumerate(entries, start=1):
        if entry.is_dir:
            line = f"{indent}{PATH_PREFIX} {entry.filename}/"
            yield f"{line}: {entry.fs_id}" if options.show_fsid else line
            if options.depth < 0 or depth < options.depth:
                yield from render_tree(entry.path, lister, options, depth + 1)
            continue

        if position == count:
            prefix = LAST_FILE_PREFIX
        line = f"{indent}{prefix} {entry.filename}"
        yield f"{line}: {entry.fs_id}" if options.show_fsid else line