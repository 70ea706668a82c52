"""领域协议定义

集中定义依赖获取层与外部协作者之间的接口契约（Protocol），
上层依赖抽象而非具体实现。

使用 typing.Protocol 而非 ABC，现有类无需修改继承关系即可满足协议。
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from gitsource.core.models import NameVer, Package, Summary


# =========================================================================
# 包清单读取协议
# =========================================================================

class ManifestReader(Protocol):
    """包清单读取者协议

    给定工作树目录，返回解析后的 Package；清单缺失或无效时抛 ManifestError。
    """

    def __call__(self, directory: Path) -> Package:
        ...


# =========================================================================
# 依赖来源协议
# =========================================================================

class Source(Protocol):
    """可插拔依赖来源协议

    依赖解析器只通过这四个操作与具体来源（git、registry、本地路径）交互。
    """

    def update(self) -> None:
        """把来源同步到本地，唯一允许修改磁盘状态的操作"""
        ...

    def list(self) -> list[Summary]:
        """列出来源提供的包摘要"""
        ...

    def download(self, packages: list[NameVer]) -> None:
        """下载指定包的内容"""
        ...

    def get(self, packages: list[NameVer]) -> list[Package]:
        """返回与请求匹配的包"""
        ...
