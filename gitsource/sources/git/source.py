"""Git 来源适配器

把 Remote → Database → Checkout 组合成通用的 Source 能力集
{update, list, download, get}，清单读取委托给外部的 ManifestReader。

缓存布局（for_url 构造时）:
  <git_db_dir>/<ident>/                 bare 镜像，所有引用共享
  <git_checkout_dir>/<ident>/<ref>/     每个引用一个工作树（ref 经百分号编码）
"""

from __future__ import annotations

import hashlib
import logging
import re
from pathlib import Path
from urllib.parse import quote

from gitsource.core.config import Config, get_config
from gitsource.core.manifest import YamlManifestReader
from gitsource.core.models import NameVer, Package, Summary
from gitsource.core.protocols import ManifestReader
from gitsource.sources.git.checkout import GitCheckout
from gitsource.sources.git.reference import DEFAULT, GitReference
from gitsource.sources.git.remote import GitRemote
from gitsource.utils.shell import CommandExecutor

logger = logging.getLogger(__name__)

_UNSAFE_PATH_CHARS_RE = re.compile(r"[^A-Za-z0-9_.\-]")


def canonical_url(url: str) -> str:
    """去掉末尾的 / 与 .git，使同一仓库的不同写法映射到同一镜像"""
    url = url.rstrip("/")
    if url.endswith(".git"):
        url = url[: -len(".git")]
    return url


def ident(url: str) -> str:
    """镜像目录名: <仓库名>-<规范化 URL 的 sha256 前 16 位>"""
    canonical = canonical_url(url)
    name = re.split(r"[/:]", canonical)[-1] or "_empty"
    name = _UNSAFE_PATH_CHARS_RE.sub("_", name)
    digest = hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:16]
    return f"{name}-{digest}"


def checkout_dir_name(reference: GitReference) -> str:
    """工作树目录名: 引用的百分号编码，不同引用不会落到同一目录"""
    name = quote(reference.as_str(), safe="")
    if name.startswith("."):
        name = "%2E" + name[1:]
    return name


class GitSource:
    """单个 {Remote, Reference, 镜像路径, 工作树路径} 上的依赖来源"""

    def __init__(
        self,
        remote: GitRemote,
        reference: str | GitReference,
        db_path: Path,
        checkout_path: Path,
        *,
        manifest_reader: ManifestReader | None = None,
    ) -> None:
        if not isinstance(reference, GitReference):
            reference = GitReference.for_str(reference)
        self.remote = remote
        self.reference = reference
        self.db_path = Path(db_path)
        self.checkout_path = Path(checkout_path)
        self.read_manifest = manifest_reader or YamlManifestReader()
        self.last_checkout: GitCheckout | None = None

    @classmethod
    def for_url(
        cls,
        url: str,
        reference: str = "",
        *,
        config: Config | None = None,
        executor: CommandExecutor | None = None,
        manifest_reader: ManifestReader | None = None,
    ) -> GitSource:
        """按配置中的缓存目录布局构造来源"""
        cfg = config or get_config()
        remote = GitRemote.parse(
            url, verbose=cfg.verbose, executor=executor,
            allowed_schemes=frozenset(cfg.allowed_schemes),
        )
        ref = GitReference.for_str(reference) if reference else DEFAULT
        repo_ident = ident(url)
        return cls(
            remote,
            ref,
            Path(cfg.git_db_dir) / repo_ident,
            Path(cfg.git_checkout_dir) / repo_ident / checkout_dir_name(ref),
            manifest_reader=manifest_reader or YamlManifestReader(cfg.manifest_name),
        )

    def __str__(self) -> str:
        text = f"git repo at {self.remote.url}"
        if not self.reference.is_default:
            text += f" ({self.reference})"
        return text

    def __repr__(self) -> str:
        return f"GitSource({self.remote.url!r}, {self.reference.as_str()!r})"

    # ------------------------------------------------------------------
    # Source 能力集
    # ------------------------------------------------------------------

    def update(self) -> None:
        """同步镜像并把工作树固定到引用的最新 revision"""
        logger.info("更新来源: %s", self)
        database = self.remote.checkout(self.db_path)
        self.last_checkout = database.copy_to(self.reference, self.checkout_path)

    def list(self) -> list[Summary]:
        pkg = self.read_manifest(self.checkout_path)
        return [pkg.summary]

    def download(self, packages: list[NameVer]) -> None:
        """git 来源在 update() 时已物化全部内容，没有单独的传输步骤"""

    def get(self, packages: list[NameVer]) -> list[Package]:
        pkg = self.read_manifest(self.checkout_path)
        if any(pkg.is_for_name_ver(nv) for nv in packages):
            return [pkg]
        return []
