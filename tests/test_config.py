import json

import pytest

from pcskit.config import (
    BaiduUser,
    BaiduUserNotFoundError,
    ConfigError,
    ConfigParseError,
    NoSuchBaiduUserError,
    PCSConfig,
    average_parallel,
    format_user_list,
    get_config_dir,
    strip_per_second,
)


@pytest.fixture
def config(tmp_path):
    cfg = PCSConfig(str(tmp_path / "conf" / "pcs_config.json"))
    yield cfg
    cfg.close()


def _users(cfg):
    cfg.add_user(BaiduUser(uid=1, name="Alice", bduss="token"))
    cfg.add_user(BaiduUser(uid=2, name="Bob", bduss="token"))
    return cfg


def test_path_join_relative_and_absolute():
    user = BaiduUser(workdir="/home/docs")
    assert user.path_join("a/../b") == "/home/docs/b"
    assert user.path_join("/abs/path") == "/abs/path"


def test_get_save_path_contains_user_dir(tmp_path):
    user = BaiduUser(uid=7, name="a:b")
    result = user.get_save_path(str(tmp_path), "/x/y.txt")
    assert result.startswith(str(tmp_path))
    assert "7_ab" in result
    assert result.endswith("y.txt")


def test_average_parallel():
    assert average_parallel(5, 0) == 1
    assert average_parallel(1, 4) == 1
    assert average_parallel(8, 1) == 8


def test_strip_per_second():
    assert strip_per_second("10MB/s") == "10MB"
    assert strip_per_second("10MB") == "10MB"


def test_get_config_dir_from_env(tmp_path, monkeypatch):
    monkeypatch.setenv("BAIDUPCS_GO_CONFIG_DIR", str(tmp_path))
    assert get_config_dir() == str(tmp_path)


def test_defaults(config):
    assert config.app_id == 266719
    assert config.cache_size == 65536
    assert config.pcs_addr == "pcs.baidu.com"
    assert config.enable_https is True


def test_init_creates_file_and_round_trips(config):
    config.init()
    _users(config)
    config.max_parallel = 8
    config.save()
    config.close()

    again = PCSConfig(config.config_file_path)
    again.init()
    assert again.max_parallel == 8
    assert [u.name for u in again.users] == ["Alice", "Bob"]
    assert again.active_user().uid == 2
    assert again.num_logins() == 2
    again.close()


def test_save_fixes_out_of_range(config):
    config.cache_size = 10
    config.max_parallel = 0
    config.save()
    with open(config.config_file_path, encoding="utf-8") as handle:
        data = json.load(handle)
    assert data["cache_size"] == 1024
    assert data["max_parallel"] == 1


def test_parse_error(tmp_path):
    path = tmp_path / "pcs_config.json"
    path.write_text("{not json", encoding="utf-8")
    cfg = PCSConfig(str(path))
    with pytest.raises(ConfigParseError):
        cfg.init()
    cfg.close()


def test_empty_path_raises():
    cfg = PCSConfig("")
    with pytest.raises(ConfigError):
        cfg.init()


def test_get_user_empty_query_and_no_users(config):
    assert config.get_user() == BaiduUser()
    with pytest.raises(NoSuchBaiduUserError):
        config.get_user(uid=3)
    with pytest.raises(BaiduUserNotFoundError):
        config.switch_user()


def test_lookup_by_name_case_insensitive(config):
    _users(config)
    assert config.get_user(name="alice").uid == 1
    assert config.check_user_exist(uid=2, name="BOB")
    assert not config.check_user_exist(uid=1, name="bob")
    with pytest.raises(BaiduUserNotFoundError):
        config.get_user(uid=99)


def test_switch_user(config):
    _users(config)
    user = config.switch_user(uid=1)
    assert user.name == "Alice"
    assert config.active_uid == 1
    assert config.active_user() is user


def test_delete_active_user_moves_to_first(config):
    _users(config)
    removed = config.delete_user(uid=2)
    assert removed.name == "Bob"
    assert config.active_uid == 1
    config.delete_user(name="alice")
    assert config.active_uid == 0
    assert config.num_logins() == 0


def test_add_user_replaces_same_uid(config):
    _users(config)
    config.add_user(BaiduUser(uid=1, name="Alice2", bduss="token"))
    assert [u.name for u in config.users] == ["Bob", "Alice2"]
    assert config.active_user().workdir == "/"


def test_add_user_extracts_bduss_from_cookies(config):
    user = config.add_user(BaiduUser(uid=5, cookies="BDUSS=token; STOKEN=token;"))
    assert user.bduss == "token"
    with pytest.raises(ConfigError):
        config.add_user(BaiduUser(uid=6, cookies="OTHER=token"))


def test_set_pcs_addr(config):
    assert config.set_pcs_addr("d.pcs.baidu.com")
    assert config.pcs_addr == "d.pcs.baidu.com"
    assert not config.set_pcs_addr("example.com")
    assert config.pcs_addr == "d.pcs.baidu.com"


def test_set_local_addrs(config):
    assert config.set_local_addrs("a,b") == ["a", "b"]
    assert config.local_addrs == "a,b"


def test_config_average_parallel(config):
    config.max_parallel = 4
    config.max_download_load = 1
    assert config.average_parallel() == 4


def test_format_user_list():
    text = format_user_list([BaiduUser(uid=42, name="carol", sex="f", age=3.0)])
    assert "carol" in text
    assert "42" in text
    assert "UID" in text
    assert "3.0" not in text