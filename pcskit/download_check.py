"""Checks on downloaded files and download links."""

import hashlib
import os
from urllib.parse import urlsplit

DOWNLOAD_SUFFIX = ".BaiduPCS-Go-downloading"

# Files the server substitutes for banned content: (size, md5).
_BANNED_PLACEHOLDERS = frozenset(
    (
        (1749504, "48bb9b0361dc9c672f3dc7b3ffcfde97"),
        (120, "6c1b84914588d09a6e5ec43605557457"),
    )
)

_CHUNK = 1 << 20


class ChecksumError(Exception):
    """Raised when a downloaded file cannot be confirmed as correct."""


class ChecksumNotSupportedError(ChecksumError):
    def __init__(self, message="该文件不支持校验"):
        super().__init__(message)


class ChecksumMismatchError(ChecksumError):
    def __init__(self, message="该文件校验失败, 文件md5值与服务器记录的不匹配"):
        super().__init__(message)


class FileBannedError(ChecksumError):
    def __init__(self, message="该文件可能是违规文件, 不支持校验"):
        super().__init__(message)


def is_skip_md5_checksum(size, md5):
    """True if the size and md5 belong to a placeholder for a banned file."""
    return (size, md5) in _BANNED_PLACEHOLDERS


def file_exist(path):
    """True if ``path`` is a non-empty file with no unfinished download state."""
    try:
        size = os.stat(path).st_size
    except OSError:
        return False
    if size == 0:
        return False
    return not os.path.exists(path + DOWNLOAD_SUFFIX)


def check_file_valid(file_path, md5, block_count):
    """Compare the md5 of ``file_path`` with ``md5`` and return the local md5.

    Raises ChecksumNotSupportedError unless the remote file has exactly one
    block, FileBannedError when the file is a placeholder for banned content
    and ChecksumMismatchError when the checksums differ.
    """
    if block_count != 1:
        raise ChecksumNotSupportedError()

    digest = hashlib.md5()
    length = 0
    with open(file_path, "rb") as handle:
        for chunk in iter(lambda: handle.read(_CHUNK), b""):
            digest.update(chunk)
            length += len(chunk)
    local_md5 = digest.hexdigest()

    if local_md5 != md5:
        if is_skip_md5_checksum(length, local_md5):
            raise FileBannedError()
        raise ChecksumMismatchError()
    return local_md5


def fix_http_link_url(url, enable_https):
    """Switch an http link to https when https is enabled."""
    if not enable_https:
        return url
    parts = urlsplit(url)
    if parts.scheme.lower() != "http":
        return url
    return parts._replace(scheme="https").geturl()