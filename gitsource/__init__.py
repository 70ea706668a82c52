"""gitsource - 包管理器依赖获取层的 git 来源"""

__version__ = "0.1.0"
