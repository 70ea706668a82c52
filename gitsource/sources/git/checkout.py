"""工作树 — 从镜像派生并固定到一个 revision

状态:
  Uninitialized (location 下没有 .git)
    → Cloned      (clone --no-checkout 完成，仅首次物化时短暂存在)
    → Pinned      (reset --hard 到 revision)

任一公开操作结束后都处于 Pinned。
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from gitsource.core.exceptions import FileSystemError
from gitsource.sources.git.command import git_inherit
from gitsource.sources.git.reference import GitReference

if TYPE_CHECKING:
    from gitsource.sources.git.database import GitDatabase
    from gitsource.utils.shell import CommandExecutor

logger = logging.getLogger(__name__)

# 工作树根目录权限：所有用户可读写执行
ALL_PERMISSIONS = 0o777


@dataclass(frozen=True)
class GitCheckout:
    """固定到 revision 的工作树

    revision 在构造时由 database.rev_for 解析一次，之后不再变化；
    再次 copy_to 会重新解析并产生新的 GitCheckout。
    """

    database: GitDatabase
    location: Path
    reference: GitReference
    revision: str
    verbose: bool = False

    @classmethod
    def clone_into(
        cls, into: Path, database: GitDatabase,
        reference: GitReference, verbose: bool,
    ) -> GitCheckout:
        """解析引用；into 下已有 .git 时复用，否则重新克隆"""
        revision = database.rev_for(reference)
        checkout = cls(
            database=database, location=Path(into).absolute(),
            reference=reference, revision=revision, verbose=verbose,
        )
        if not checkout.has_repo():
            checkout.clone_repo()
        else:
            logger.debug("复用已有工作树: %s", checkout.location)
        return checkout

    @property
    def executor(self) -> CommandExecutor:
        return self.database.executor

    @property
    def source_path(self) -> Path:
        return self.database.path

    def has_repo(self) -> bool:
        return (self.location / ".git").exists()

    def clone_repo(self) -> None:
        """从镜像克隆（只取对象，不检出文件）"""
        dirname = self.location.parent
        try:
            dirname.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileSystemError(f"无法创建目录 {dirname}: {e}", path=str(dirname)) from e

        if self.location.exists() or self.location.is_symlink():
            logger.warning("清理陈旧目录: %s", self.location)
            try:
                if self.location.is_dir() and not self.location.is_symlink():
                    shutil.rmtree(self.location)
                else:
                    self.location.unlink()
            except OSError as e:
                raise FileSystemError(
                    f"无法删除目录 {self.location}: {e}", path=str(self.location),
                ) from e

        git_inherit(
            self.executor, dirname, self.verbose,
            "clone", "--no-checkout", "--quiet", str(self.source_path), str(self.location),
        )

        try:
            self.location.chmod(ALL_PERMISSIONS)
        except OSError as e:
            raise FileSystemError(
                f"无法修改权限 {self.location}: {e}", path=str(self.location),
            ) from e

    def fetch(self) -> None:
        """从镜像拉取并硬重置到 revision（Cloned/Pinned → Pinned）"""
        git_inherit(
            self.executor, self.location, self.verbose,
            "fetch", "--force", "--quiet", "--tags", str(self.source_path),
            "refs/heads/*:refs/remotes/origin/*",
        )
        self.reset(self.revision)

    def reset(self, revision: str) -> None:
        git_inherit(self.executor, self.location, self.verbose, "reset", "-q", "--hard", revision)

    def update_submodules(self) -> None:
        git_inherit(
            self.executor, self.location, self.verbose,
            "submodule", "update", "--init", "--recursive", "--quiet",
        )
