"""Shell 命令执行工具 — 统一子进程调用

通过 CommandExecutor 协议抽象子进程执行，Remote / Database / Checkout
在构造时注入执行器，测试时可换成记录型假执行器，无需触碰真实仓库。

两种执行模式:
  - inherit: 继承调用方的标准流，只关心退出码
  - capture: 捕获 stdout，按 UTF-8 宽容解码后返回
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)


# =========================================================================
# 命令执行结果
# =========================================================================

@dataclass
class CommandResult:
    """命令执行结果（与 subprocess 解耦）"""

    returncode: int
    stdout: str = ""

    @property
    def success(self) -> bool:
        return self.returncode == 0


# =========================================================================
# 命令执行器协议
# =========================================================================

class CommandExecutor(Protocol):
    """命令执行器协议 — 抽象子进程调用

    实现方只负责运行命令并报告退出码；无法启动进程时抛 OSError。
    错误包装（带命令原文）由调用方完成。
    """

    def execute(
        self,
        args: list[str],
        *,
        cwd: str = ".",
        capture: bool = False,
    ) -> CommandResult:
        """执行命令并返回结果，capture=False 时 stdout 为空串"""
        ...


# =========================================================================
# 默认实现: 本地执行器
# =========================================================================

class LocalExecutor:
    """本地子进程执行器（默认实现）"""

    def execute(
        self,
        args: list[str],
        *,
        cwd: str = ".",
        capture: bool = False,
    ) -> CommandResult:
        if not capture:
            r = subprocess.run(args, cwd=cwd, check=False)
            return CommandResult(returncode=r.returncode)

        r = subprocess.run(args, cwd=cwd, stdout=subprocess.PIPE, check=False)
        return CommandResult(
            returncode=r.returncode,
            stdout=decode_output(r.stdout),
        )


def decode_output(raw: bytes) -> str:
    """按 UTF-8 解码，非法字节序列替换为 U+FFFD，并去掉尾部空白"""
    return raw.decode("utf-8", errors="replace").rstrip()


# =========================================================================
# 全局默认执行器（可替换）
# =========================================================================

_default_executor: CommandExecutor = LocalExecutor()


def get_executor() -> CommandExecutor:
    """获取默认命令执行器（实体构造时未显式注入则使用它）"""
    return _default_executor


def set_executor(executor: CommandExecutor) -> None:
    """替换默认命令执行器"""
    global _default_executor  # noqa: PLW0603
    _default_executor = executor
