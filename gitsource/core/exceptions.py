"""统一异常体系

所有业务异常继承 GitSourceError，替代散落的 OSError / CalledProcessError。
CLI 层据此输出友好提示；调用方可按 code 区分"配置问题"与"执行故障"。
"""

from __future__ import annotations


class GitSourceError(Exception):
    """基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(GitSourceError):
    """配置文件缺失或内容无效"""

    code = "CONFIG_ERROR"


class ValidationError(GitSourceError):
    """输入数据校验失败"""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, details: list[str] | None = None) -> None:
        super().__init__(message)
        self.details = details or []


class FileSystemError(GitSourceError):
    """目录创建 / 删除 / 权限修改失败，总是带上出错路径"""

    code = "IO_ERROR"

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(message)
        self.path = path


class ExecutionError(GitSourceError):
    """子进程非零退出或无法启动，总是带上命令原文"""

    code = "EXECUTION_ERROR"

    def __init__(
        self, message: str, command: str = "", returncode: int | None = None,
    ) -> None:
        super().__init__(message)
        self.command = command
        self.returncode = returncode


class ReferenceResolutionError(GitSourceError):
    """引用在镜像中不存在

    虽然由 rev-parse 命令产生，但属于用户侧配置问题，不归入 ExecutionError。
    """

    code = "REFERENCE_NOT_FOUND"

    def __init__(self, message: str, reference: str = "", path: str = "") -> None:
        super().__init__(message)
        self.reference = reference
        self.path = path


class ManifestError(GitSourceError):
    """包清单文件缺失或内容无效"""

    code = "MANIFEST_ERROR"

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(message)
        self.path = path
