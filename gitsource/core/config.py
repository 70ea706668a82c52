"""集中配置管理

镜像目录、工作树目录、源注册表路径等统一从这里取，
支持从 YAML 文件加载 + 编程式覆盖。
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field

import yaml

from gitsource.core.exceptions import ConfigError
from gitsource.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """全局配置"""

    # 目录
    git_db_dir: str = "deps/git/db"
    git_checkout_dir: str = "deps/git/checkouts"
    sources_file: str = "deps/sources.yml"

    # 包清单文件名（位于每个工作树根目录）
    manifest_name: str = "package.yml"

    # 执行
    verbose: bool = False
    allowed_schemes: list[str] = field(
        default_factory=lambda: ["http", "https", "ssh", "git", "file"],
    )

    # 放不到字段里的配置项
    extra: dict = field(default_factory=dict)

    @classmethod
    def from_file(cls, path: str = "configs/gitsource.yml") -> Config:
        """从 YAML 文件加载配置，不存在则返回默认"""
        try:
            data = load_yaml(path)
        except (yaml.YAMLError, ValueError) as e:
            raise ConfigError(f"配置文件无效: {path}: {e}") from e
        if not data:
            return cls()
        known = {f for f in cls.__dataclass_fields__ if f != "extra"}
        matched = {k: v for k, v in data.items() if k in known}
        extra = {k: v for k, v in data.items() if k not in known}
        cfg = cls(**matched)
        cfg.extra = extra
        return cfg

    def to_dict(self) -> dict:
        return asdict(self)


# 全局单例，首次 import 时不加载文件；由 CLI 入口显式初始化
_current: Config | None = None


def get_config() -> Config:
    """获取当前配置（未初始化则返回默认值）"""
    global _current  # noqa: PLW0603
    if _current is None:
        _current = Config()
    return _current


def init_config(path: str = "configs/gitsource.yml") -> Config:
    """从文件初始化全局配置"""
    global _current  # noqa: PLW0603
    _current = Config.from_file(path)
    logger.info("配置已加载: %s", path)
    return _current


def reset_config() -> None:
    """丢弃全局配置，下次 get_config() 重新取默认值"""
    global _current  # noqa: PLW0603
    _current = None
