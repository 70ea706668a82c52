"""诊断视图 — 把实体投影为可序列化的普通字典

投影与实体内部字段分离：实体内部表示变化时，只需调整这里，输出格式保持不变。
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from gitsource.sources.git.checkout import GitCheckout
    from gitsource.sources.git.database import GitDatabase
    from gitsource.sources.git.remote import GitRemote


def encode_remote(remote: GitRemote) -> dict[str, Any]:
    return {"url": remote.url}


def encode_database(database: GitDatabase) -> dict[str, Any]:
    return {
        "remote": encode_remote(database.remote),
        "path": str(database.path),
    }


def encode_checkout(checkout: GitCheckout) -> dict[str, Any]:
    return {
        "database": encode_database(checkout.database),
        "location": str(checkout.location),
        "reference": checkout.reference.as_str(),
        "revision": checkout.revision,
    }
