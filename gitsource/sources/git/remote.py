"""远程仓库 — 在本地维护一份 bare 镜像

同一个镜像可供任意多个工作树复用：首次调用 clone，之后只 fetch。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from gitsource.core.exceptions import FileSystemError
from gitsource.sources.git.command import git_inherit
from gitsource.sources.git.database import GitDatabase
from gitsource.utils.net import DEFAULT_GIT_SCHEMES, validate_url_scheme
from gitsource.utils.shell import CommandExecutor, get_executor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GitRemote:
    """远程仓库 {url, verbose}，按值比较"""

    url: str
    verbose: bool = False
    executor: CommandExecutor = field(
        default_factory=get_executor, compare=False, repr=False,
    )

    @classmethod
    def parse(
        cls, url: str, *, verbose: bool = False,
        executor: CommandExecutor | None = None,
        allowed_schemes: frozenset[str] = DEFAULT_GIT_SCHEMES,
    ) -> GitRemote:
        """校验 URL 后构造 Remote

        verbose=True 时每条 git 命令以 INFO 级别记录日志，需已配置 logging 才可见
        （见 gitsource.sources.git.command）。
        """
        validate_url_scheme(url, allowed=allowed_schemes, context="git remote")
        return cls(url=url, verbose=verbose, executor=executor or get_executor())

    def checkout(self, into: Path) -> GitDatabase:
        """把远程仓库同步到 into 处的 bare 镜像，返回绑定到 into 的 Database

        镜像已存在 → fetch；否则 → clone。两种情况下重复调用都是幂等的。
        """
        into = Path(into).absolute()
        # TODO: 以 into 为粒度加 advisory 文件锁，防止多个构建进程同时写同一镜像
        if into.exists():
            self._fetch_into(into)
        else:
            self._clone_into(into)
        return GitDatabase(remote=self, path=into)

    def _fetch_into(self, path: Path) -> None:
        logger.info("更新镜像: %s -> %s", self.url, path)
        git_inherit(
            self.executor, path, self.verbose,
            "fetch", "--force", "--quiet", "--tags", self.url,
            "refs/heads/*:refs/heads/*",
        )

    def _clone_into(self, path: Path) -> None:
        dirname = path.parent
        try:
            dirname.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileSystemError(
                f"无法递归创建目录 `{dirname}`: {e}", path=str(dirname),
            ) from e

        logger.info("创建镜像: %s -> %s", self.url, path)
        git_inherit(
            self.executor, dirname, self.verbose,
            "clone", self.url, str(path), "--bare", "--no-hardlinks", "--quiet",
        )
