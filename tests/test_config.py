from pathlib import Path

import pytest

from foldericon import config as config_mod
from foldericon.config import CACHE_SUBDIR, AppInfo, CacheConfig, resolve_cache_dir
from foldericon.errors import AppDataDirError


def test_env_cache_dir_override(tmp_path: Path):
    cfg = CacheConfig.from_env({"FOLDERICON_CACHE_DIR": str(tmp_path / "icons")})

    assert cfg.cache_dir == (tmp_path / "icons").resolve()
    assert cfg.force_refresh is False


@pytest.mark.parametrize(("value", "expected"), [("1", True), ("TRUE", True), ("yes", True), ("0", False), ("", False)])
def test_env_force_refresh(tmp_path: Path, value, expected):
    cfg = CacheConfig.from_env({"FOLDERICON_CACHE_DIR": str(tmp_path), "FOLDERICON_FORCE_REFRESH": value})
    assert cfg.force_refresh is expected


def test_with_force_refresh_returns_new_config(tmp_path: Path):
    cfg = CacheConfig(tmp_path)
    forced = cfg.with_force_refresh(True)

    assert forced.force_refresh is True
    assert cfg.force_refresh is False
    assert forced.cache_dir == cfg.cache_dir


def test_cache_dir_is_absolute(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    cfg = CacheConfig(Path("relative") / "icons")

    assert cfg.cache_dir.is_absolute()
    assert cfg.cache_dir == (tmp_path / "relative" / "icons").resolve()


def test_app_info_cache_dir_uses_platform_data_dir(tmp_path: Path, monkeypatch):
    seen = {}

    def fake_user_data_dir(appname=None, appauthor=None):
        seen["appname"] = appname
        return str(tmp_path / "data" / appname)

    monkeypatch.setattr(config_mod, "user_data_dir", fake_user_data_dir)
    monkeypatch.setattr(config_mod.sys, "platform", "linux")

    cache_dir = resolve_cache_dir(AppInfo(application="demo"))

    assert seen["appname"] == "demo"
    assert cache_dir == (tmp_path / "data" / "demo" / CACHE_SUBDIR).resolve()
    assert CacheConfig.from_app_info(AppInfo(application="demo")).cache_dir == cache_dir


def test_app_info_uses_reverse_dns_name_on_macos(tmp_path: Path, monkeypatch):
    monkeypatch.setattr(config_mod, "user_data_dir", lambda appname=None, appauthor=None: str(tmp_path / appname))
    monkeypatch.setattr(config_mod.sys, "platform", "darwin")

    assert AppInfo("com", "acme", "icons").data_dir() == tmp_path / "com.acme.icons"


def test_empty_application_name_is_rejected():
    with pytest.raises(AppDataDirError):
        AppInfo(application="  ").data_dir()
