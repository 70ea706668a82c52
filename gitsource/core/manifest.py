"""包清单读取

每个工作树根目录下有一个固定文件名的 YAML 清单（默认 package.yml）:

    name: foo
    version: 1.0.0
    description: 可选
    dependencies:
      bar: ">=0.3"

标量按原文读取（不做 YAML 类型推断），`version: 1.10` 就是 "1.10"。

Source 适配器把这里当作外部协作者，只通过 ManifestReader 协议调用。
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from gitsource.core.exceptions import ManifestError
from gitsource.core.models import Package, Summary
from gitsource.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)

MANIFEST_NAME = "package.yml"


class YamlManifestReader:
    """从工作树读取 YAML 清单（ManifestReader 协议的默认实现）"""

    def __init__(self, manifest_name: str = MANIFEST_NAME) -> None:
        self.manifest_name = manifest_name

    def __call__(self, directory: Path) -> Package:
        path = Path(directory) / self.manifest_name
        if not path.is_file():
            raise ManifestError(f"清单文件不存在: {path}", path=str(path))

        try:
            data = load_yaml(path, loader=yaml.BaseLoader)
        except (yaml.YAMLError, ValueError, OSError) as e:
            raise ManifestError(f"无法读取清单 {path}: {e}", path=str(path)) from e

        missing = [k for k in ("name", "version") if not data.get(k)]
        if missing:
            raise ManifestError(
                f"清单缺少必填字段 {', '.join(missing)}: {path}", path=str(path),
            )
        for key in ("name", "version"):
            if not isinstance(data[key], str):
                raise ManifestError(f"清单字段 {key} 必须是字符串: {path}", path=str(path))

        deps = data.get("dependencies") or {}
        if not isinstance(deps, dict):
            raise ManifestError(f"dependencies 必须是映射: {path}", path=str(path))

        summary = Summary(
            name=str(data["name"]),
            version=str(data["version"]),
            description=str(data.get("description", "")),
            dependencies={str(k): str(v) for k, v in deps.items()},
        )
        logger.debug("已读取清单: %s -> %s@%s", path, summary.name, summary.version)
        return Package(summary=summary, root=Path(directory))


def read_manifest(directory: Path, manifest_name: str = MANIFEST_NAME) -> Package:
    """读取目录下的包清单"""
    return YamlManifestReader(manifest_name)(directory)
