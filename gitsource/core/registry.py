"""YAML 注册表基类

基于单个 YAML 文件某一段（section_key）的增删改查，子类只需指定 section_key。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from gitsource.core.exceptions import ValidationError
from gitsource.utils.yaml_io import load_yaml, save_yaml

logger = logging.getLogger(__name__)


class YamlRegistry:
    """YAML 文件注册表基类

    子类用法:
        class MyRegistry(YamlRegistry):
            section_key = "items"
    """

    section_key: str = "entries"

    def __init__(self, registry_file: str | Path) -> None:
        self.registry_file = Path(registry_file)
        self._data: dict[str, Any] = load_yaml(self.registry_file)

    def _section(self) -> dict[str, dict[str, Any]]:
        """获取当前 section 字典（自动创建）"""
        section = self._data.get(self.section_key)
        if not isinstance(section, dict):
            section = {}
            self._data[self.section_key] = section
        return section

    def _save(self) -> None:
        save_yaml(self.registry_file, self._data)

    def _put(self, name: str, entry: dict[str, Any]) -> dict[str, Any]:
        """写入条目并保存"""
        self._section()[name] = entry
        self._save()
        return entry

    def _entry(self, name: str, value: Any) -> dict[str, Any]:
        """空条目视为 {}，其余非映射条目报错"""
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise ValidationError(
                f"{self.registry_file} 中的条目 '{name}' 必须是映射, 实际为 {type(value).__name__}",
            )
        return value

    def _get_raw(self, name: str) -> dict[str, Any] | None:
        section = self._section()
        if name not in section:
            return None
        return self._entry(name, section[name])

    def _list_raw(self) -> list[dict[str, Any]]:
        """列出所有条目（带 name 字段）"""
        return [{"name": k, **self._entry(k, v)} for k, v in self._section().items()]

    def _remove(self, name: str) -> bool:
        section = self._section()
        if name not in section:
            return False
        del section[name]
        self._save()
        return True
