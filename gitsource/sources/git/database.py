"""本地 bare 镜像

Database 负责把引用解析为具体 revision，并从自身派生 / 刷新工作树。
镜像一旦创建便不会被删除，只会被 fetch 更新。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from gitsource.core.exceptions import ExecutionError, ReferenceResolutionError
from gitsource.sources.git.command import git_output
from gitsource.sources.git.reference import GitReference

if TYPE_CHECKING:
    from gitsource.sources.git.checkout import GitCheckout
    from gitsource.sources.git.remote import GitRemote
    from gitsource.utils.shell import CommandExecutor

logger = logging.getLogger(__name__)

# rev-parse --verify --quiet 在引用不存在时以 1 退出，致命错误为 128
_REF_NOT_FOUND_RC = 1


def _as_reference(reference: str | GitReference) -> GitReference:
    if isinstance(reference, GitReference):
        return reference
    return GitReference.for_str(reference)


@dataclass(frozen=True)
class GitDatabase:
    """remote 在 path 处的 bare 镜像"""

    remote: GitRemote
    path: Path

    @property
    def verbose(self) -> bool:
        return self.remote.verbose

    @property
    def executor(self) -> CommandExecutor:
        return self.remote.executor

    def rev_for(self, reference: str | GitReference) -> str:
        """把引用解析为 commit id

        Raises:
            ReferenceResolutionError: 引用在镜像中不存在（rev-parse 退出码 1）
            ExecutionError: 其余失败，如镜像损坏或不是仓库（退出码 128）
        """
        ref = _as_reference(reference).as_str()
        try:
            rev = git_output(
                self.executor, self.path, self.verbose,
                "rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}",
            )
        except ExecutionError as e:
            if e.returncode != _REF_NOT_FOUND_RC:
                raise
            raise ReferenceResolutionError(
                f"引用 `{ref}` 在镜像 {self.path} 中不存在", reference=ref, path=str(self.path),
            ) from e

        rev = rev.strip()
        if not rev or "\n" in rev:
            raise ReferenceResolutionError(
                f"引用 `{ref}` 未解析为唯一 revision: {rev!r}", reference=ref, path=str(self.path),
            )
        return rev

    def copy_to(self, reference: str | GitReference, dest: Path) -> GitCheckout:
        """在 dest 处获取 / 复用工作树，并固定到 reference 的最新 revision

        无论工作树是新克隆还是复用，都会重新 fetch + 硬重置 + 更新子模块。
        """
        from gitsource.sources.git.checkout import GitCheckout

        checkout = GitCheckout.clone_into(
            Path(dest), self, _as_reference(reference), self.verbose,
        )
        checkout.fetch()
        checkout.update_submodules()
        logger.info(
            "工作树就绪: %s@%s -> %s", checkout.reference, checkout.revision[:12], checkout.location,
        )
        return checkout
