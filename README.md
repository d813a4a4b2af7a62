# pcskit

Pieces for building a command-line client for a cloud drive service. Each
module does one job and can be used on its own.

## Modules

- `pcskit.args` splits an interactive command line into arguments. It
  understands single, double and back quotes and backslash escapes:
  `parse`, `is_quote`.
- `pcskit.liner` reads lines with `input()` and keeps them in a history file.
  `Liner.pause` saves the history and `Liner.resume` ends the pause;
  `LineHistory` reads and rewrites the file; `clear_screen` writes the ANSI
  clear-screen sequence.
- `pcskit.table` renders borderless, column-aligned text tables that take
  the display width of CJK text into account. Header cells are upper-cased
  and centred; `Align.DEFAULT` puts numbers right and text left:
  `Table`, `Align`.
- `pcskit.tasks` holds the retry back-off policy (`retry_wait`, in seconds)
  and a thread-safe transfer statistic with a running total and a timer:
  `Statistic`.
- `pcskit.captcha` manages the captcha image path in the temporary
  directory: `captcha_path`, `remove_captcha_path`,
  `remove_old_captcha_path`.
- `pcskit.config` stores accounts and settings in a JSON configuration file,
  with adding, switching, deleting and looking up accounts by uid or name
  (names compare case-insensitively): `PCSConfig`, `BaiduUser`,
  `get_config_dir`, `average_parallel`, `strip_per_second`,
  `format_user_list`, and the `ConfigError` family
  (`BaiduUserNotFoundError`, `NoSuchBaiduUserError`, `ConfigParseError`,
  `ConfigPermissionError`).
- `pcskit.links` parses rapid-upload links and share links and formats
  export lines: `parse_rapid_link`, `parse_share_link`, `RapidLink`,
  `ShareLink`, `format_rapidupload_command`, `format_link_line`,
  `change_root_path`, `export_filename`, `split_cp_mv_paths`,
  `pick_single_match`, `randomify_md5`, `LinkFormatError`.
- `pcskit.tree` yields the lines of a directory tree from any listing
  function: `render_tree`, `Entry`, `TreeOptions`.
- `pcskit.download_check` verifies downloaded files against their recorded
  MD5: `check_file_valid`, `file_exist`, `is_skip_md5_checksum`,
  `fix_http_link_url`, and the `ChecksumError` family
  (`ChecksumNotSupportedError`, `ChecksumMismatchError`, `FileBannedError`).
- `pcskit.update` reads release information, picks the archive that fits a
  platform and installs the files of an archive already in memory:
  `ReleaseInfo`, `AssetInfo`, `has_update`, `asset_pattern`, `match_assets`,
  `replace_file`, `install_update`.

## Examples

Splitting a command line:

```python
from pcskit.args import parse

parse('cd "my folder"')  # ['cd', 'my folder']
```

Dividing download parallelism between simultaneous files:

```python
from pcskit.config import average_parallel

average_parallel(8, 3)  # 2
```

Printing a table:

```python
import sys
from pcskit.table import Table

table = Table(sys.stdout)
table.set_header(["#", "path"])
table.append(["0", "/docs/report.txt"])
table.render()
```

Reading a rapid-upload link of the form `md5#slice_md5#length#name`:

```python
from pcskit.links import parse_rapid_link

link = parse_rapid_link(
    "0123456789abcdef0123456789abcdef#fedcba9876543210fedcba9876543210#1024#notes.txt"
)
```

A malformed link raises `LinkFormatError`.

Drawing a tree from a listing function:

```python
from pcskit.tree import Entry, render_tree

listing = {"/": [Entry("a.txt", "/a.txt")]}
for line in render_tree("/", listing.__getitem__):
    print(line)  # └── a.txt
```

## Configuration location

`get_config_dir` looks at the `BAIDUPCS_GO_CONFIG_DIR` environment variable
first (a relative value is taken from the directory of the running script);
otherwise it uses the running script's directory if a `pcs_config.json` is
already there, and falls back to a per-user configuration directory
(`%APPDATA%\BaiduPCS-Go` on Windows, `~/.config/BaiduPCS-Go` elsewhere).

## What this package does not do

- It has no command-line program of its own and installs no commands.
- It does not talk to the cloud drive service: there is no login, listing,
  upload, download, sharing or transfer client. Functions such as
  `render_tree` and the link parsers work on data you supply.
- `pcskit.config` does not check accounts with the service; `add_user`
  only stores what it is given.
- `pcskit.update` does not fetch release information or archives over the
  network; it works on JSON and archive bytes you have already obtained.

## Tests

The test suite uses pytest, declared in the `test` extra.