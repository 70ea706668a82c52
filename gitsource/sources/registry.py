"""来源注册表

deps/sources.yml:

    sources:
      foo:
        git: https://example.com/foo.git
        ref: v1.2.0        # 可选，缺省为主分支
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any

from gitsource.core.config import Config, get_config
from gitsource.core.exceptions import ValidationError
from gitsource.core.registry import YamlRegistry
from gitsource.sources.git.reference import DEFAULT_BRANCH
from gitsource.sources.git.source import GitSource
from gitsource.utils.net import validate_url_scheme
from gitsource.utils.shell import CommandExecutor

logger = logging.getLogger(__name__)

_SAFE_REF_RE = re.compile(r"^[a-zA-Z0-9_./@^~\-]+$")


@dataclass
class GitSourceSpec:
    """注册表中的单个 git 来源"""

    name: str
    url: str
    ref: str = DEFAULT_BRANCH


class SourceRegistry(YamlRegistry):
    """git 来源注册表"""

    section_key = "sources"

    def __init__(self, registry_file: str = "", config: Config | None = None) -> None:
        self.config = config or get_config()
        super().__init__(registry_file or self.config.sources_file)

    def register(self, spec: GitSourceSpec) -> dict[str, Any]:
        """校验并注册一个来源"""
        if not spec.name:
            raise ValidationError("来源 name 为必填")
        validate_url_scheme(
            spec.url, allowed=frozenset(self.config.allowed_schemes),
            context=f"source {spec.name}",
        )
        ref = spec.ref or DEFAULT_BRANCH
        if not _SAFE_REF_RE.match(ref) or ref.startswith("-"):
            raise ValidationError(f"ref 包含非法字符: {ref}")

        entry = self._put(spec.name, {"git": spec.url, "ref": ref})
        logger.info("来源已注册: %s -> %s (%s)", spec.name, spec.url, ref)
        return entry

    def get(self, name: str) -> GitSourceSpec | None:
        raw = self._get_raw(name)
        if raw is None:
            return None
        return self._to_spec(name, raw)

    def load(self) -> dict[str, GitSourceSpec]:
        """加载全部来源定义"""
        specs = {item["name"]: self._to_spec(item["name"], item) for item in self._list_raw()}
        logger.info("已加载 %d 个来源", len(specs))
        return specs

    def remove(self, name: str) -> bool:
        return self._remove(name)

    def build(
        self, spec: GitSourceSpec, *, executor: CommandExecutor | None = None,
    ) -> GitSource:
        """按配置的缓存布局把定义实例化为 GitSource"""
        return GitSource.for_url(spec.url, spec.ref, config=self.config, executor=executor)

    @staticmethod
    def _to_spec(name: str, raw: dict[str, Any]) -> GitSourceSpec:
        url = raw.get("git") or ""
        if not url:
            raise ValidationError(f"来源 '{name}' 未定义 git 地址")
        return GitSourceSpec(name=name, url=str(url), ref=str(raw.get("ref") or DEFAULT_BRANCH))
