"""Tests for fmcontent.config."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from fmcontent import BackendError, ConfigError
from fmcontent.acl import NO_ACCESS, READ_WRITE, AclRule
from fmcontent.config import ContentConfig, build_acl, build_disks, load_config, parse_config
from fmcontent.storage.local import LocalBackend
from fmcontent.storage.memory import MemoryBackend


def _write_config(tmp_path: Path, data: object) -> Path:
    path = tmp_path / "fmcontent.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestParseConfig:
    def test_defaults(self) -> None:
        config = parse_config({})
        assert config == ContentConfig()
        assert config.acl is False
        assert config.acl_strategy == "blacklist"

    def test_full_config(self) -> None:
        config = parse_config(
            {
                "acl": True,
                "acl_hide_from_fm": True,
                "acl_strategy": "whitelist",
                "acl_rules": [{"disk": "public", "path": "docs/*", "access": 2}],
                "disks": {"public": {"driver": "local", "root": "files"}},
            }
        )
        assert config.acl is True
        assert config.acl_hide_from_fm is True
        assert config.acl_rules == (AclRule("public", "docs/*", READ_WRITE),)

    @pytest.mark.parametrize(
        ("data", "message"),
        [
            ([], "must be a JSON object"),
            ({"acl": "yes"}, "'acl' must be true or false"),
            ({"acl_strategy": "greylist"}, "Unknown acl_strategy"),
            ({"acl_rules": {"disk": "a"}}, "must be a list of objects"),
            ({"acl_rules": [{"disk": "a", "path": "*"}]}, "missing: access"),
            ({"disks": []}, "'disks' must be an object"),
            ({"disks": {"x": {"driver": "ftp"}}}, "unknown driver 'ftp'"),
            ({"disks": {"x": {"driver": "local"}}}, "requires 'root'"),
        ],
    )
    def test_invalid(self, data: object, message: str) -> None:
        with pytest.raises(ConfigError, match=message):
            parse_config(data)


class TestLoadConfig:
    def test_reads_file(self, tmp_path: Path) -> None:
        path = _write_config(tmp_path, {"acl": True})
        assert load_config(path).acl is True

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Cannot read config"):
            load_config(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid JSON"):
            load_config(path)


class TestBuild:
    def test_build_disks(self, sample_tree: Path) -> None:
        config = parse_config(
            {
                "disks": {
                    "local": {"driver": "local", "root": str(sample_tree), "ignore": ["secret/"]},
                    "s3": {"driver": "memory", "files": {"a/b.txt": "hello"}},
                }
            }
        )
        disks = build_disks(config)
        assert isinstance(disks.disk("local"), LocalBackend)
        assert isinstance(disks.disk("s3"), MemoryBackend)
        assert disks.names() == ["local", "s3"]
        assert "secret" not in disks.disk("local").directories()
        assert disks.disk("s3").directories() == ["a"]
        with pytest.raises(BackendError):
            disks.disk("other")

    def test_relative_root_resolves_against_base_dir(self, sample_tree: Path) -> None:
        config = parse_config({"disks": {"docs": {"driver": "local", "root": "docs"}}})
        backend = build_disks(config, base_dir=sample_tree).disk("docs")
        assert backend.root == (sample_tree / "docs").resolve()

    def test_build_acl(self) -> None:
        config = parse_config(
            {
                "acl_strategy": "whitelist",
                "acl_rules": [{"disk": "local", "path": "docs*", "access": 2}],
            }
        )
        acl = build_acl(config)
        assert acl.get_access_level("local", "docs/a.txt") == READ_WRITE
        assert acl.get_access_level("local", "secret") == NO_ACCESS
