"""Config 加载测试"""

from __future__ import annotations

from pathlib import Path

import pytest

from gitsource.core.config import Config, get_config, init_config, reset_config
from gitsource.core.exceptions import ConfigError


class TestConfig:
    def test_defaults(self) -> None:
        cfg = Config()
        assert cfg.git_db_dir == "deps/git/db"
        assert cfg.manifest_name == "package.yml"
        assert cfg.verbose is False
        assert "file" in cfg.allowed_schemes

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        assert Config.from_file(str(tmp_path / "nope.yml")) == Config()

    def test_from_file_known_and_extra(self, tmp_path: Path) -> None:
        p = tmp_path / "cfg.yml"
        p.write_text("git_db_dir: /cache/db\nverbose: true\nowner: infra\n", encoding="utf-8")
        cfg = Config.from_file(str(p))
        assert cfg.git_db_dir == "/cache/db"
        assert cfg.verbose is True
        assert cfg.extra == {"owner": "infra"}

    def test_invalid_yaml_raises_config_error(self, tmp_path: Path) -> None:
        p = tmp_path / "bad.yml"
        p.write_text("a: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="配置文件无效"):
            Config.from_file(str(p))

    def test_global_singleton(self, tmp_path: Path) -> None:
        p = tmp_path / "cfg.yml"
        p.write_text("git_checkout_dir: /co\n", encoding="utf-8")
        cfg = init_config(str(p))
        assert get_config() is cfg
        assert get_config().git_checkout_dir == "/co"
        reset_config()
        assert get_config().git_checkout_dir == "deps/git/checkouts"

    def test_to_dict(self) -> None:
        d = Config().to_dict()
        assert d["sources_file"] == "deps/sources.yml"
