"""核心数据模型

包清单读取的结果类型集中定义在这里。
Source 适配器只依赖 name + version 身份，其余字段原样透传给上层。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class NameVer:
    """包的 name + version 身份，用于 get() 过滤"""

    name: str
    version: str

    def __str__(self) -> str:
        return f"{self.name}@{self.version}"


@dataclass
class Summary:
    """包摘要 — list() 只返回这一部分"""

    name: str
    version: str
    description: str = ""
    dependencies: dict[str, str] = field(default_factory=dict)  # name -> 版本要求

    @property
    def name_ver(self) -> NameVer:
        return NameVer(self.name, self.version)


@dataclass
class Package:
    """工作树中读出的完整包"""

    summary: Summary
    root: Path

    @property
    def name(self) -> str:
        return self.summary.name

    @property
    def version(self) -> str:
        return self.summary.version

    def is_for_name_ver(self, nv: NameVer) -> bool:
        return self.summary.name_ver == nv
