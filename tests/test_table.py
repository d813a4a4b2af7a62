import io

from wcwidth import wcswidth

from pcskit.table import Align, Table


def _render(header=None, rows=(), alignments=None):
    out = io.StringIO()
    table = Table(out)
    if header is not None:
        table.set_header(header)
    if alignments is not None:
        table.set_column_alignment(alignments)
    for row in rows:
        table.append(row)
    table.render()
    return out.getvalue()


def test_empty_table_renders_nothing():
    assert _render() == ""


def test_header_is_titled():
    text = _render(["#", "fs_id"], [["0", "12"]])
    assert "FS ID" in text.splitlines()[0]


def test_all_lines_same_width():
    text = _render(["#", "路径"], [["0", "英语.doc"], ["10", "a"]])
    widths = {wcswidth(line) for line in text.splitlines()}
    assert len(widths) == 1


def test_default_numbers_right_text_left():
    lines = _render(rows=[["1", "a"], ["100", "bbb"]]).splitlines()
    assert lines[0].index("1") + 1 == lines[1].index("100") + 3
    assert lines[0].index("a") == lines[1].index("bbb")


def test_explicit_left_alignment_for_numbers():
    lines = _render(rows=[["1"], ["100"]], alignments=[Align.LEFT]).splitlines()
    assert lines[0].index("1") == lines[1].index("100")


def test_explicit_right_alignment_for_text():
    lines = _render(rows=[["a"], ["bbb"]], alignments=[Align.RIGHT]).splitlines()
    assert lines[0].rstrip().endswith("a")
    assert len(lines[0].rstrip()) == len(lines[1].rstrip())


def test_center_alignment_balances_gap():
    lines = _render(rows=[["a"], ["abcde"]], alignments=[Align.CENTER]).splitlines()
    left = lines[0].index("a") - lines[1].index("a")
    right = len(lines[0]) - lines[0].index("a") - 1 - (len(lines[1]) - lines[1].index("e") - 1)
    assert left == right


def test_multiline_cell_adds_lines():
    lines = _render(rows=[["x", "first\nsecond"]]).splitlines()
    assert len(lines) == 2
    assert "first" in lines[0] and "second" in lines[1]


def test_short_row_is_padded():
    lines = _render(["a", "b", "c"], [["1"]]).splitlines()
    assert len(lines) == 2
    assert len(lines[0]) == len(lines[1])