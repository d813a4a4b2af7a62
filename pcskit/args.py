"""Split a command line into arguments, honouring quotes and escapes."""

ESCAPE = "\\"
SINGLE_QUOTE = "'"
DOUBLE_QUOTE = '"'
BACK_QUOTE = "`"

_QUOTES = frozenset((SINGLE_QUOTE, DOUBLE_QUOTE, BACK_QUOTE))


def is_quote(char):
    """Return True if ``char`` is one of the recognised quote characters."""
    return char in _QUOTES


def parse(line):
    """Split ``line`` into a list of arguments.

    Quotes group words and are removed; a backslash escapes whitespace,
    quotes and itself, and is kept literally before any other character.
    An argument left inside an unclosed quote is dropped.
    """
    chars = line + " "
    last = len(chars) - 1
    args = []
    buf = []
    quote = ""
    escaped = False
    inside = False

    for pos, char in enumerate(chars):
        is_space = char.isspace()
        if not is_space and not inside:
            inside = True

        if escaped:
            escaped = False
        elif char == ESCAPE:
            # Only escape when not the last real character.
            if pos + 1 < last:
                following = chars[pos + 1]
                if following.isspace() or is_quote(following) or following == ESCAPE:
                    escaped = True
                    continue
        elif is_quote(char):
            if not quote:
                quote = char
                continue
            if quote == char:
                quote = ""
                continue
        elif is_space:
            if not inside:
                continue
            if not quote:
                args.append("".join(buf))
                buf.clear()
                inside = False
                continue

        buf.append(char)

    return args