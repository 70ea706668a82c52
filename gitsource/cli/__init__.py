"""gitsource 命令行接口

CLI 按领域拆分为子模块，每个模块注册自己的命令到 main group。
"""

from __future__ import annotations

import functools
import logging
import os
from typing import Any, Callable

import click

from gitsource import __version__
from gitsource.core.config import init_config
from gitsource.core.exceptions import GitSourceError
from gitsource.utils.logger import setup_logging


def handle_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    """把业务异常转成 ClickException，输出 `[code] message` 并返回非零码"""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except GitSourceError as e:
            raise click.ClickException(f"[{e.code}] {e}") from e

    return wrapper


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "-c", default="configs/gitsource.yml", help="配置文件路径")
@click.option("--verbose", "-v", is_flag=True, default=False, help="输出每条 git 命令")
@handle_errors
def main(config: str, verbose: bool) -> None:
    """gitsource - git 依赖来源"""
    setup_logging(
        level=os.getenv("GITSOURCE_LOG_LEVEL", "INFO"),
        json_output=os.getenv("GITSOURCE_LOG_JSON", "") == "1",
    )
    cfg = init_config(config)
    if verbose:
        cfg.verbose = True
    if cfg.verbose:
        # 诊断为 INFO 级别，不受 GITSOURCE_LOG_LEVEL 抑制
        logging.getLogger("gitsource.sources.git.command").setLevel(logging.INFO)


from gitsource.cli.cmd_source import register as _reg_source  # noqa: E402

_reg_source(main)
