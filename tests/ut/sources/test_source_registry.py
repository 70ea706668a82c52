"""SourceRegistry 测试"""

from __future__ import annotations

from pathlib import Path

import pytest

from gitsource.core.config import Config
from gitsource.core.exceptions import ValidationError
from gitsource.sources.git.reference import NamedRef
from gitsource.sources.git.source import ident
from gitsource.sources.registry import GitSourceSpec, SourceRegistry

URL = "https://example.com/foo.git"


@pytest.fixture()
def config(tmp_path: Path) -> Config:
    return Config(
        git_db_dir=str(tmp_path / "db"),
        git_checkout_dir=str(tmp_path / "co"),
        sources_file=str(tmp_path / "sources.yml"),
    )


class TestSourceRegistry:
    def test_register_and_get(self, config: Config) -> None:
        reg = SourceRegistry(config=config)
        entry = reg.register(GitSourceSpec(name="foo", url=URL, ref="v1.0"))
        assert entry == {"git": URL, "ref": "v1.0"}
        assert reg.get("foo") == GitSourceSpec(name="foo", url=URL, ref="v1.0")
        assert reg.get("missing") is None

    def test_persisted_to_config_path(self, config: Config) -> None:
        SourceRegistry(config=config).register(GitSourceSpec(name="foo", url=URL))
        assert Path(config.sources_file).exists()
        assert "foo" in SourceRegistry(config=config).load()

    def test_default_ref(self, config: Config) -> None:
        reg = SourceRegistry(config=config)
        reg.register(GitSourceSpec(name="foo", url=URL, ref=""))
        assert reg.get("foo").ref == "master"

    def test_load_from_handwritten_file(self, config: Config) -> None:
        Path(config.sources_file).write_text(
            "sources:\n  foo:\n    git: https://example.com/foo.git\n  bar:\n    git: https://example.com/bar.git\n    ref: dev\n",
            encoding="utf-8",
        )
        specs = SourceRegistry(config=config).load()
        assert specs["foo"].ref == "master"
        assert specs["bar"].ref == "dev"

    def test_missing_git_url(self, config: Config) -> None:
        Path(config.sources_file).write_text("sources:\n  foo:\n    ref: dev\n", encoding="utf-8")
        with pytest.raises(ValidationError, match="未定义 git 地址"):
            SourceRegistry(config=config).load()

    @pytest.mark.parametrize(("spec", "match"), [
        (GitSourceSpec(name="", url=URL), "name"),
        (GitSourceSpec(name="x", url="ftp://example.com/x"), "不允许的 URL 协议"),
        (GitSourceSpec(name="x", url=URL, ref="a;rm -rf"), "非法字符"),
        (GitSourceSpec(name="x", url=URL, ref="--upload-pack=x"), "非法字符"),
    ])
    def test_register_rejects(self, config: Config, spec: GitSourceSpec, match: str) -> None:
        with pytest.raises(ValidationError, match=match):
            SourceRegistry(config=config).register(spec)

    def test_remove(self, config: Config) -> None:
        reg = SourceRegistry(config=config)
        reg.register(GitSourceSpec(name="foo", url=URL))
        assert reg.remove("foo") is True
        assert reg.remove("foo") is False

    def test_build_uses_config_layout(self, config: Config, executor) -> None:
        reg = SourceRegistry(config=config)
        src = reg.build(GitSourceSpec(name="foo", url=URL, ref="v1"), executor=executor)
        assert src.db_path == Path(config.git_db_dir) / ident(URL)
        assert src.reference == NamedRef("v1")
        assert src.remote.executor is executor
