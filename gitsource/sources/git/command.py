"""git 命令调用

所有 git 子命令都经由这里：verbose 时输出一行诊断，
非零退出 / 无法启动统一包装为带命令原文的 ExecutionError。

verbose 诊断以 INFO 级别写入 logger "gitsource.sources.git.command"。
CLI 入口会调用 setup_logging；作为库使用时需由调用方配置 logging
（如 setup_logging("INFO") 或 logging.basicConfig(level=logging.INFO)），
否则 Python 默认只输出 WARNING 及以上，诊断不可见。
"""

from __future__ import annotations

import logging
import shlex
from pathlib import Path

from gitsource.core.exceptions import ExecutionError
from gitsource.utils.shell import CommandExecutor, CommandResult

logger = logging.getLogger(__name__)


def _run(
    executor: CommandExecutor, path: Path, verbose: bool,
    args: list[str], *, capture: bool,
) -> CommandResult:
    text = shlex.join(args)
    if verbose:
        logger.info("执行 git %s @ %s", text, path)
    else:
        logger.debug("执行 git %s @ %s", text, path)

    try:
        result = executor.execute(["git", *args], cwd=str(path), capture=capture)
    except OSError as e:
        raise ExecutionError(f"无法执行 `git {text}`: {e}", command=f"git {text}") from e

    if not result.success:
        raise ExecutionError(
            f"执行 `git {text}` 失败 (rc={result.returncode})",
            command=f"git {text}",
            returncode=result.returncode,
        )
    return result


def git_inherit(
    executor: CommandExecutor, path: Path, verbose: bool, *args: str,
) -> None:
    """在 path 下运行 git 命令，继承标准流"""
    _run(executor, path, verbose, list(args), capture=False)


def git_output(
    executor: CommandExecutor, path: Path, verbose: bool, *args: str,
) -> str:
    """在 path 下运行 git 命令，返回去掉尾部空白的 stdout"""
    return _run(executor, path, verbose, list(args), capture=True).stdout.rstrip()
