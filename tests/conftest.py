"""测试共享 fixture — 记录型假执行器 + 本地真实 git 仓库

  RecordingExecutor     记录每条 git 命令，按子命令返回预设输出 / 退出码；
                        clone 时创建目标目录，模拟真实 git 的文件系统效果
  upstream              tmp 下的本地上游仓库（主分支 master，含 package.yml）
  commit                向上游追加提交的工厂函数
"""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from typing import Callable

import pytest

from gitsource.core.config import reset_config
from gitsource.utils.shell import CommandResult

# =========================================================================
# 假执行器
# =========================================================================


class RecordingExecutor:
    """CommandExecutor 的测试实现"""

    def __init__(
        self,
        outputs: dict[str, str] | None = None,
        failures: dict[str, int] | None = None,
    ) -> None:
        self.outputs = outputs or {}
        self.failures = failures or {}
        self.calls: list[tuple[list[str], str, bool]] = []

    def execute(
        self, args: list[str], *, cwd: str = ".", capture: bool = False,
    ) -> CommandResult:
        self.calls.append((list(args), cwd, capture))
        sub = args[1]
        if sub in self.failures:
            return CommandResult(returncode=self.failures[sub])
        if sub == "clone":
            positional = [a for a in args[2:] if not a.startswith("-")]
            dest = Path(positional[-1])
            dest.mkdir(parents=True, exist_ok=True)
            if "--bare" not in args:
                (dest / ".git").mkdir(exist_ok=True)
        return CommandResult(returncode=0, stdout=self.outputs.get(sub, "") if capture else "")

    @property
    def subcommands(self) -> list[str]:
        return [args[1] for args, _, _ in self.calls]

    def find(self, sub: str) -> list[tuple[list[str], str, bool]]:
        return [c for c in self.calls if c[0][1] == sub]


REV_A = "a" * 40


@pytest.fixture()
def executor() -> RecordingExecutor:
    return RecordingExecutor(outputs={"rev-parse": REV_A + "\n"})


@pytest.fixture()
def make_executor() -> type[RecordingExecutor]:
    return RecordingExecutor


@pytest.fixture(autouse=True)
def _fresh_config():
    reset_config()
    yield
    reset_config()


# =========================================================================
# 真实 git 仓库
# =========================================================================

def run_git(cwd: Path, *args: str) -> str:
    r = subprocess.run(
        ["git", *args], cwd=str(cwd), check=True,
        stdout=subprocess.PIPE, stderr=subprocess.PIPE, text=True,
    )
    return r.stdout.strip()


@pytest.fixture()
def git_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """隔离用户级 git 配置，固定提交身份；git 不可用时跳过"""
    if shutil.which("git") is None:
        pytest.skip("git 不可用")
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_AUTHOR_NAME", "tester")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "tester@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "tester")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "tester@example.com")
    # 新版 git 默认禁止 file:// 子模块
    monkeypatch.setenv("GIT_CONFIG_COUNT", "1")
    monkeypatch.setenv("GIT_CONFIG_KEY_0", "protocol.file.allow")
    monkeypatch.setenv("GIT_CONFIG_VALUE_0", "always")
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))


@pytest.fixture()
def git() -> Callable[..., str]:
    return run_git


@pytest.fixture()
def commit() -> Callable[..., str]:
    """向仓库写入文件并提交，返回新 commit id"""

    def _commit(repo: Path, files: dict[str, str], message: str = "update") -> str:
        for rel, content in files.items():
            p = repo / rel
            p.parent.mkdir(parents=True, exist_ok=True)
            p.write_text(content, encoding="utf-8")
        run_git(repo, "add", "-A")
        run_git(repo, "commit", "-q", "-m", message)
        return run_git(repo, "rev-parse", "HEAD")

    return _commit


@pytest.fixture()
def upstream(tmp_path: Path, git_env: None, commit: Callable[..., str]) -> Path:
    """主分支为 master、已有一次提交的上游仓库"""
    repo = tmp_path / "upstream"
    repo.mkdir()
    run_git(repo, "init", "-q")
    run_git(repo, "symbolic-ref", "HEAD", "refs/heads/master")
    commit(repo, {
        "package.yml": "name: foo\nversion: 1.0.0\n",
        "src/lib.txt": "v1\n",
    }, "initial")
    return repo
