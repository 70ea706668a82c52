"""依赖来源"""

from gitsource.sources.git import GitSource
from gitsource.sources.registry import GitSourceSpec, SourceRegistry

__all__ = ["GitSource", "GitSourceSpec", "SourceRegistry"]
