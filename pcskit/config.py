"""Account list and settings, kept in a JSON configuration file."""

import io
import json
import os
import posixpath
import re
import sys
import threading
from dataclasses import asdict, dataclass, fields

from pcskit.table import Align, Table

ENV_CONFIG_DIR = "BAIDUPCS_GO_CONFIG_DIR"
CONFIG_NAME = "pcs_config.json"
DEFAULT_PCS_ADDR = "pcs.baidu.com"

_PCS_ADDR = re.compile(r"^([cd]\d?\.)?pcs\.baidu\.com")
_INVALID_PATH_CHARS = str.maketrans("", "", '\\/:*?"<>|')


class ConfigError(Exception):
    """Raised when the configuration cannot be used."""


class BaiduUserNotFoundError(ConfigError):
    def __init__(self, message="baidu user not found"):
        super().__init__(message)


class NoSuchBaiduUserError(ConfigError):
    def __init__(self, message="no such baidu user"):
        super().__init__(message)


class ConfigParseError(ConfigError):
    def __init__(self, message="config contents parse error"):
        super().__init__(message)


class ConfigPermissionError(ConfigError):
    def __init__(self, message="config file permission denied"):
        super().__init__(message)


def _clean_pcs_path(path):
    if not path:
        return "."
    cleaned = posixpath.normpath(path)
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


@dataclass
class BaiduUser:
    """A logged-in account."""

    uid: int = 0
    name: str = ""
    sex: str = ""
    age: float = 0.0
    bduss: str = ""
    ptoken: str = ""
    stoken: str = ""
    sboxtkn: str = ""
    cookies: str = ""
    workdir: str = ""

    @classmethod
    def from_dict(cls, data):
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})

    def to_dict(self):
        return asdict(self)

    def path_join(self, path):
        """Join ``path`` onto the working directory unless it is absolute."""
        if posixpath.isabs(path):
            return path
        return _clean_pcs_path(posixpath.join(self.workdir, path))

    def get_save_path(self, save_dir, pcs_path):
        """Local path under ``save_dir`` where ``pcs_path`` is stored."""
        user_dir = f"{self.uid}_{self.name.translate(_INVALID_PATH_CHARS)}"
        joined = os.sep.join(part for part in (save_dir, user_dir, pcs_path) if part)
        try:
            return os.path.abspath(joined)
        except (OSError, ValueError):
            return os.path.normpath(joined)


def _format_age(age):
    age = float(age)
    if age.is_integer() and abs(age) < 1e21:
        return str(int(age))
    return repr(age)


def format_user_list(users):
    """Render the accounts as a table."""
    out = io.StringIO()
    table = Table(out)
    table.set_column_alignment([Align.DEFAULT, Align.RIGHT, Align.CENTER, Align.CENTER, Align.CENTER])
    table.set_header(["#", "uid", "用户名", "性别", "age"])
    for index, user in enumerate(users):
        table.append([str(index), str(user.uid), user.name, user.sex, _format_age(user.age)])
    table.render()
    return out.getvalue()


def average_parallel(parallel, download_load):
    """Download parallelism per file, never below one."""
    if download_load < 1:
        return 1
    return max(parallel // download_load, 1)


def strip_per_second(size_str):
    """Drop a trailing rate suffix such as ``/s``."""
    index = size_str.rfind("/")
    if index < 0:
        return size_str
    return size_str[:index]


def _executable_dir():
    return os.path.dirname(os.path.abspath(sys.argv[0] or "."))


def get_config_dir():
    """Directory holding the configuration file."""
    config_dir = os.environ.get(ENV_CONFIG_DIR)
    if config_dir is not None:
        if os.path.isabs(config_dir):
            return config_dir
        return os.path.join(_executable_dir(), config_dir)

    old_dir = _executable_dir()
    if os.path.exists(os.path.join(old_dir, CONFIG_NAME)):
        return old_dir

    if sys.platform == "win32":
        app_data = os.environ.get("APPDATA")
        if app_data is None:
            return old_dir
        return os.path.join(app_data, "BaiduPCS-Go")

    home = os.environ.get("HOME")
    if home is None:
        return old_dir
    config_dir = os.path.join(home, ".config", "BaiduPCS-Go")
    try:
        os.makedirs(config_dir, mode=0o700, exist_ok=True)
    except OSError:
        return old_dir
    return config_dir


def _default_save_dir():
    if sys.platform == "win32":
        return os.path.join(_executable_dir(), "Downloads")
    if hasattr(sys, "getandroidapilevel"):
        return "/sdcard/Download"
    home = os.environ.get("HOME")
    if home is None:
        return os.path.join(_executable_dir(), "Downloads")
    return os.path.join(home, "Downloads")


_SETTINGS = (
    ("appid", "app_id"),
    ("cache_size", "cache_size"),
    ("max_parallel", "max_parallel"),
    ("max_upload_parallel", "max_upload_parallel"),
    ("max_download_load", "max_download_load"),
    ("max_upload_load", "max_upload_load"),
    ("max_download_rate", "max_download_rate"),
    ("max_upload_rate", "max_upload_rate"),
    ("user_agent", "user_agent"),
    ("pcs_ua", "pcs_ua"),
    ("pcs_addr", "pcs_addr"),
    ("pan_ua", "pan_ua"),
    ("savedir", "save_dir"),
    ("enable_https", "enable_https"),
    ("proxy", "proxy"),
    ("local_addrs", "local_addrs"),
    ("no_check", "no_check"),
)


class PCSConfig:
    """Settings and accounts backed by a JSON file."""

    def __init__(self, config_file_path):
        self.config_file_path = config_file_path
        self.active_uid = 0
        self.users = []
        self.max_download_rate = 0
        self.max_upload_rate = 0
        self.proxy = ""
        self.local_addrs = ""
        self._file = None
        self._lock = threading.RLock()
        self._active_user = None
        self.init_default_config()

    def init_default_config(self):
        self.app_id = 266719
        self.cache_size = 65536
        self.max_parallel = 1
        self.max_upload_parallel = 4
        self.max_upload_load = 4
        self.max_download_load = 1
        self.user_agent = ""
        self.pcs_ua = ""
        self.pcs_addr = DEFAULT_PCS_ADDR
        self.pan_ua = ""
        self.enable_https = True
        self.no_check = True
        self.save_dir = _default_save_dir()

    def init(self):
        """Load the file, creating it with defaults when empty."""
        if not self.config_file_path:
            raise ConfigError("config file not exist")
        self.init_default_config()
        self._load()
        if self._active_user is not None and self._active_user.uid == self.active_uid:
            return
        self._active_user = self.get_user(uid=self.active_uid)

    def reload(self):
        self.init()

    def _open(self):
        if self._file is not None:
            return self._file
        with self._lock:
            directory = os.path.dirname(self.config_file_path)
            if directory:
                os.makedirs(directory, mode=0o700, exist_ok=True)
            try:
                fd = os.open(self.config_file_path, os.O_CREAT | os.O_RDWR, 0o600)
            except PermissionError as exc:
                raise ConfigPermissionError() from exc
            self._file = os.fdopen(fd, "r+b")
        return self._file

    def _fix(self):
        self.cache_size = max(self.cache_size, 1024)
        self.max_parallel = max(self.max_parallel, 1)
        self.max_upload_parallel = max(self.max_upload_parallel, 1)
        self.max_download_load = max(self.max_download_load, 1)
        self.max_upload_load = max(self.max_upload_load, 1)

    def to_dict(self):
        data = {
            "baidu_active_uid": self.active_uid,
            "baidu_user_list": [user.to_dict() for user in self.users],
        }
        for key, attr in _SETTINGS:
            data[key] = getattr(self, attr)
        return data

    def save(self):
        """Repair out-of-range values and write the configuration."""
        self._fix()
        handle = self._open()
        data = json.dumps(self.to_dict(), indent=" ", ensure_ascii=False).encode("utf-8")
        with self._lock:
            handle.seek(0)
            handle.truncate()
            handle.write(data)
            handle.flush()

    def _load(self):
        handle = self._open()
        with self._lock:
            handle.seek(0)
            raw = handle.read()
        if not raw:
            self.save()
            return
        try:
            data = json.loads(raw.decode("utf-8"))
            if not isinstance(data, dict):
                raise ValueError("not an object")
            if "baidu_active_uid" in data:
                self.active_uid = int(data["baidu_active_uid"])
            if "baidu_user_list" in data:
                self.users = [BaiduUser.from_dict(item) for item in data["baidu_user_list"] or [] if item is not None]
            for key, attr in _SETTINGS:
                if key in data:
                    setattr(self, attr, data[key])
        except (ValueError, TypeError) as exc:
            raise ConfigParseError() from exc

    def close(self):
        if self._file is not None:
            handle, self._file = self._file, None
            handle.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def active_user(self):
        """The current account, or an empty one when none is active."""
        return self._active_user if self._active_user is not None else BaiduUser()

    def num_logins(self):
        return len(self.users)

    def average_parallel(self):
        return average_parallel(self.max_parallel, self.max_download_load)

    def _set_active(self, user):
        self.active_uid = user.uid
        self._active_user = user

    def _find(self, uid, name):
        if not uid and not name:
            return None
        if not self.users:
            raise NoSuchBaiduUserError()
        for index, user in enumerate(self.users):
            if uid and name:
                hit = user.uid == uid and user.name.casefold() == name.casefold()
            elif name:
                hit = user.name.casefold() == name.casefold()
            else:
                hit = user.uid == uid
            if hit:
                return index
        raise BaiduUserNotFoundError()

    def switch_user(self, uid=0, name=""):
        """Make the matching account active and return it."""
        index = self._find(uid, name)
        if index is None:
            raise BaiduUserNotFoundError()
        user = self.users[index]
        self._set_active(user)
        return user

    def delete_user(self, uid=0, name=""):
        """Remove the matching account and return it."""
        index = self._find(uid, name)
        if index is None:
            raise BaiduUserNotFoundError()
        user = self.users.pop(index)
        if self.active_uid == user.uid:
            if self.users:
                self._set_active(self.users[0])
            else:
                self.active_uid = 0
        return user

    def get_user(self, uid=0, name=""):
        """Return the matching account, or an empty one for an empty query."""
        index = self._find(uid, name)
        if index is None:
            return BaiduUser()
        return self.users[index]

    def check_user_exist(self, uid=0, name=""):
        try:
            return self._find(uid, name) is not None
        except ConfigError:
            return False

    def add_user(self, user):
        """Add ``user``, replacing one with the same uid, and make it active."""
        if not user.bduss and user.cookies:
            found = re.search(r"BDUSS=(.+?);", user.cookies)
            if found is None:
                raise ConfigError("BDUSS not found in cookies")
            user.bduss = found.group(1)
        if not user.workdir:
            user.workdir = "/"
        if user.uid:
            try:
                self.delete_user(uid=user.uid)
            except ConfigError:
                pass
        self.users.append(user)
        self._set_active(user)
        return user

    def set_pcs_addr(self, pcs_addr):
        """Set the PCS server address if it is a valid one; return whether it was."""
        if _PCS_ADDR.match(pcs_addr) is None:
            return False
        self.pcs_addr = pcs_addr
        return True

    def set_local_addrs(self, local_addrs):
        """Set the comma separated local addresses and return them as a list."""
        self.local_addrs = local_addrs
        return local_addrs.split(",")