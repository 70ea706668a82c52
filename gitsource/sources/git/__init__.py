"""Git 来源模块

拆分说明:
- reference.py: 引用（主分支 | 命名引用）
- command.py: git 命令调用与错误包装
- remote.py: 远程仓库 → bare 镜像
- database.py: 镜像 → 引用解析 / 工作树派生
- checkout.py: 固定到 revision 的工作树
- encodable.py: 诊断视图
- source.py: Source 能力集适配器
"""

from gitsource.sources.git.checkout import GitCheckout
from gitsource.sources.git.database import GitDatabase
from gitsource.sources.git.encodable import encode_checkout, encode_database, encode_remote
from gitsource.sources.git.reference import DEFAULT, DefaultRef, GitReference, NamedRef
from gitsource.sources.git.remote import GitRemote
from gitsource.sources.git.source import GitSource, ident

__all__ = [
    "DEFAULT",
    "DefaultRef",
    "NamedRef",
    "GitReference",
    "GitRemote",
    "GitDatabase",
    "GitCheckout",
    "GitSource",
    "ident",
    "encode_remote",
    "encode_database",
    "encode_checkout",
]
