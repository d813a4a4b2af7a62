"""Selecting and installing program updates from release information."""

import io
import json
import logging
import os
import re
import shutil
import stat
import zipfile
from dataclasses import dataclass, field

RELEASE_NAME = "BaiduPCS-Go-releases"
PROGRAM_NAME = "BaiduPCS-Go"

_log = logging.getLogger(__name__)

_ARCH_PATTERNS = {
    "amd64": "(amd64|x86_64|x64)",
    "386": "(386|x86)",
    "arm": "(armv5|armv7|arm)",
    "arm64": "arm64",
    "mips": "mips",
    "mips64": "mips64",
    "mipsle": "(mipsle|mipsel)",
    "mips64le": "(mips64le|mips64el)",
}


@dataclass
class AssetInfo:
    """A file attached to a release."""

    name: str = ""
    content_type: str = ""
    state: str = ""
    size: int = 0
    browser_download_url: str = ""

    @classmethod
    def from_dict(cls, data):
        return cls(
            name=data.get("name", "") or "",
            content_type=data.get("content_type", "") or "",
            state=data.get("state", "") or "",
            size=int(data.get("size", 0) or 0),
            browser_download_url=data.get("browser_download_url", "") or "",
        )


@dataclass
class ReleaseInfo:
    """A published release and its assets."""

    tag_name: str = ""
    assets: list = field(default_factory=list)

    @classmethod
    def from_json(cls, data):
        """Build from a decoded JSON object or from JSON text or bytes."""
        if isinstance(data, (str, bytes, bytearray)):
            data = json.loads(data)
        if not isinstance(data, dict):
            raise ValueError("release information is not a JSON object")
        assets = [
            None if item is None else AssetInfo.from_dict(item)
            for item in data.get("assets") or []
        ]
        return cls(tag_name=data.get("tag_name", "") or "", assets=assets)


def has_update(version, tag_name):
    """True if ``tag_name`` is a newer, non-beta release than ``version``."""
    if "Beta" in tag_name or not tag_name.startswith("v"):
        return False
    return version < tag_name


def asset_pattern(tag_name, goos, goarch):
    """Regular expression matching the archive name for the given platform."""
    parts = [f"{PROGRAM_NAME}-{tag_name}-{goos}-.*?"]
    if goos == "darwin" and goarch in ("arm", "arm64"):
        parts.append("arm")
    else:
        parts.append(_ARCH_PATTERNS.get(goarch, goarch))
    parts.append(r"\.zip")
    return re.compile("".join(parts))


def match_assets(release, goos, goarch):
    """Uploaded assets of ``release`` built for the given platform."""
    pattern = asset_pattern(release.tag_name, goos, goarch)
    return [
        asset
        for asset in release.assets
        if asset is not None and asset.state == "uploaded" and pattern.search(asset.name)
    ]


def replace_file(target_path, src):
    """Replace ``target_path`` with the contents of the binary stream ``src``.

    The file keeps its permissions. Returns False, leaving nothing written,
    when the target does not exist.
    """
    try:
        info = os.stat(target_path)
    except OSError as exc:
        _log.warning("%s", exc)
        return False

    mode = stat.S_IMODE(info.st_mode)
    directory, name = os.path.split(target_path)
    old_path = os.path.join(directory, "old" + name)

    os.rename(target_path, old_path)
    fd = os.open(target_path, os.O_CREAT | os.O_WRONLY, mode)
    with os.fdopen(fd, "wb") as new_file:
        shutil.copyfileobj(src, new_file)

    try:
        os.remove(old_path)
    except OSError as exc:
        _log.warning("移除旧文件发生错误: %s", exc)
    return True


def install_update(zip_bytes, exec_dir, executable):
    """Install the files of an update archive and return how many succeeded.

    Entries are stored under a top-level directory, which is dropped; the
    program itself replaces ``executable`` and the rest go to ``exec_dir``.
    Raises RuntimeError when no file could be installed.
    """
    file_num = 0
    err_times = 0
    with zipfile.ZipFile(io.BytesIO(zip_bytes)) as archive:
        for entry in archive.infolist():
            if entry.is_dir():
                continue
            try:
                src = archive.open(entry)
            except (zipfile.BadZipFile, OSError, RuntimeError) as exc:
                _log.warning("解析 zip 文件错误: %s", exc)
                continue

            file_num += 1
            name = entry.filename.split("/", 1)[-1]
            target = executable if name == PROGRAM_NAME else os.path.join(exec_dir, name)
            try:
                with src:
                    replace_file(target, src)
            except (OSError, zipfile.BadZipFile) as exc:
                err_times += 1
                _log.warning("发生错误, zip 路径: %s, 错误: %s", entry.filename, exc)

    if err_times == file_num:
        raise RuntimeError("更新失败")
    return file_num - err_times