"""Git 引用 — 主分支 | 命名引用 的二元标签联合

主分支是否被引用是类型上的区分（isinstance(ref, DefaultRef)），
而不是散落在各调用点的字符串比较。
"""

from __future__ import annotations

import functools
from abc import ABC, abstractmethod
from dataclasses import dataclass

DEFAULT_BRANCH = "master"


@functools.total_ordering
class GitReference(ABC):
    """引用基类，相等与排序均按规范字符串"""

    __slots__ = ()

    @staticmethod
    def for_str(value: str) -> GitReference:
        """把原始字符串归类：主分支字面量 → DEFAULT，其余 → NamedRef"""
        if value == DEFAULT_BRANCH:
            return DEFAULT
        return NamedRef(value)

    @abstractmethod
    def as_str(self) -> str:
        ...

    @property
    def is_default(self) -> bool:
        return False

    def __str__(self) -> str:
        return self.as_str()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GitReference):
            return NotImplemented
        return self.as_str() == other.as_str()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, GitReference):
            return NotImplemented
        return self.as_str() < other.as_str()

    def __hash__(self) -> int:
        return hash(self.as_str())


class DefaultRef(GitReference):
    """仓库主分支"""

    __slots__ = ()

    def as_str(self) -> str:
        return DEFAULT_BRANCH

    @property
    def is_default(self) -> bool:
        return True

    def __repr__(self) -> str:
        return "DefaultRef()"


@dataclass(frozen=True, eq=False, repr=True)
class NamedRef(GitReference):
    """命名的分支 / tag / commit-ish"""

    name: str

    def as_str(self) -> str:
        return self.name


DEFAULT = DefaultRef()
