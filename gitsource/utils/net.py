"""网络工具 — 远程仓库地址校验"""

from __future__ import annotations

import re
from urllib.parse import urlparse

from gitsource.core.exceptions import ValidationError

DEFAULT_GIT_SCHEMES = frozenset(("http", "https", "ssh", "git", "file"))

# scp 风格地址: git@github.com:owner/repo.git
_SCP_LIKE_RE = re.compile(r"^[\w.\-]+@[\w.\-]+:(?!//)\S+$")


def url_scheme(url: str) -> str:
    """返回 URL 的 scheme，scp 风格地址视为 ssh"""
    if _SCP_LIKE_RE.match(url):
        return "ssh"
    return urlparse(url).scheme


def validate_url_scheme(
    url: str, *, allowed: frozenset[str] = DEFAULT_GIT_SCHEMES, context: str = "",
) -> None:
    """校验仓库 URL 的协议位于白名单内

    Raises:
        ValidationError: URL 为空或 scheme 不在白名单内
    """
    label = f" ({context})" if context else ""
    if not url:
        raise ValidationError(f"仓库 URL 为空{label}")
    scheme = url_scheme(url)
    if scheme not in allowed:
        raise ValidationError(
            f"不允许的 URL 协议 '{scheme}'{label}，"
            f"仅支持 {'/'.join(sorted(allowed))}: {url}"
        )
