"""Parsing and formatting of share links, rapid-upload links and path arguments."""

import base64
import binascii
import random
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

RAPID_LINK_PREFIXES = ("bdlink=", "bdpan://")
SHARE_HOST = "pan.baidu.com/"
EXPORT_PREFIX = "BaiduPCS-Go_export_"
_INVALID_LINK = "链接地址或提取码非法"
_INVALID_RAPID_LINK = "秒传链接格式错误"

_ENCODED_RAPID_LINK = re.compile(r"(bdlink=|bdpan://)([^\t\n\f\r ]+)")
_INT = re.compile(r"[+-]?[0-9]+")
_INT64_MAX = 2**63 - 1
_INT64_MIN = -(2**63)
_BEIJING = timezone(timedelta(hours=8))


class LinkFormatError(ValueError):
    """Raised when a share or rapid-upload link cannot be understood."""


@dataclass
class RapidLink:
    """What is needed to save a file by its checksums alone."""

    md5: str
    slice_md5: str
    length: int
    filename: str
    crc32: str = ""


@dataclass
class ShareLink:
    """A share page's feature string and its extraction code, if any."""

    feature: str
    extract_code: str | None = None

    @property
    def surl(self):
        """The short URL key: the feature string without its leading '1'."""
        return self.feature[1:]


def _clean(path):
    if not path:
        return "."
    rooted = path.startswith("/")
    parts = []
    for segment in path.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if parts and parts[-1] != "..":
                parts.pop()
            elif not rooted:
                parts.append("..")
            continue
        parts.append(segment)
    joined = "/".join(parts)
    if rooted:
        return "/" + joined
    return joined or "."


def _join(*elements):
    present = [element for element in elements if element]
    if not present:
        return ""
    return _clean("/".join(present))


def _base(path):
    if not path:
        return "."
    stripped = path.rstrip("/")
    if not stripped:
        return "/"
    return stripped.rsplit("/", 1)[-1]


def _parse_int64(text):
    if _INT.fullmatch(text) is None:
        return 0
    return min(max(int(text), _INT64_MIN), _INT64_MAX)


def _decode_rapid_link(link):
    found = _ENCODED_RAPID_LINK.search(link)
    if found is None:
        raise LinkFormatError(_INVALID_RAPID_LINK)
    try:
        decoded = base64.b64decode(found.group(2), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise LinkFormatError(_INVALID_RAPID_LINK) from exc
    return decoded.decode("utf-8", errors="replace")


def parse_rapid_link(link):
    """Parse a rapid-upload link.

    Accepts ``md5#slice_md5#length#filename``, ``filename|length|md5|slice_md5``
    and either of them base64 encoded after ``bdlink=`` or ``bdpan://``.
    """
    if any(prefix in link for prefix in RAPID_LINK_PREFIXES):
        link = _decode_rapid_link(link)
    link = link.strip()

    parts = link.split("#")
    if len(parts) == 4:
        md5, slice_md5, length, filename = parts
        return RapidLink(md5.lower(), slice_md5.lower(), _parse_int64(length), filename)

    parts = link.split("|")
    if len(parts) == 4:
        filename, length, md5, slice_md5 = parts
        return RapidLink(md5.lower(), slice_md5.lower(), _parse_int64(length), filename)

    raise LinkFormatError(_INVALID_RAPID_LINK)


def randomify_md5(md5, rng=None):
    """Upper-case a random selection of the characters of ``md5``."""
    rng = random.Random() if rng is None else rng
    return "".join(char.upper() if rng.random() > 0.6 else char for char in md5)


def parse_share_link(params):
    """Parse ``[link]`` or ``[link, extract_code]`` into a ShareLink.

    Returns None when a single argument is a rapid-upload link rather than
    a share page.
    """
    params = list(params)
    if len(params) == 1:
        link = params[0]
        if "bdlink=" in link or SHARE_HOST not in link:
            return None
        extract_code = "none"
    elif len(params) == 2:
        link, extract_code = params
    else:
        raise LinkFormatError(_INVALID_LINK)

    if not link:
        raise LinkFormatError(_INVALID_LINK)
    if link.endswith("/"):
        link = link[:-1]

    feature = link.split("/")[-1]
    if "init?" in feature:
        pieces = feature.split("=")
        if len(pieces) < 2:
            raise LinkFormatError(_INVALID_LINK)
        feature = "1" + pieces[1]

    if (
        len(feature.encode("utf-8")) not in (8, 23)
        or not feature.startswith("1")
        or len(extract_code.encode("utf-8")) != 4
    ):
        raise LinkFormatError(_INVALID_LINK)

    return ShareLink(feature, None if extract_code == "none" else extract_code)


def split_cp_mv_paths(paths):
    """Split copy/move arguments into the sources and the destination."""
    paths = list(paths)
    if len(paths) <= 1:
        raise ValueError("参数不完整")
    return paths[:-1], paths[-1]


def change_root_path(dst_root_path, dst_path, src_root_path):
    """Move ``dst_path`` from under ``dst_root_path`` to under ``src_root_path``."""
    if not src_root_path:
        return dst_path
    relative = dst_path[len(dst_root_path):] if dst_path.startswith(dst_root_path) else dst_path
    return _join(src_root_path, relative)


def export_filename(now=None):
    """Default name of the export file, stamped with Beijing time."""
    moment = datetime.now(_BEIJING) if now is None else now.astimezone(_BEIJING)
    return f"{EXPORT_PREFIX}{moment.strftime('%Y-%m-%d %H:%M:%S')}.txt"


def format_rapidupload_command(link, path):
    """The command line that saves ``link`` to ``path`` by rapid upload."""
    return (
        f"BaiduPCS-Go rapidupload -length={link.length} -md5={link.md5} "
        f'-slicemd5={link.slice_md5} -crc32={link.crc32} "{path}"\n'
    )


def format_link_line(link, path):
    """The ``md5#slice_md5#length#name`` line for ``link`` stored at ``path``."""
    return f"{link.md5}#{link.slice_md5}#{link.length}#{_base(path)}\n"


def pick_single_match(paths):
    """Return the one path of a pattern match; raise LookupError otherwise."""
    paths = list(paths)
    if not paths:
        raise LookupError("未匹配到路径, 请检测通配符")
    if len(paths) > 1:
        raise LookupError("多条通配符匹配结果")
    return paths[0]