"""CLI — git 来源管理命令"""

from __future__ import annotations

import json

import click
import yaml

from gitsource.cli import handle_errors
from gitsource.core.exceptions import ValidationError
from gitsource.core.models import NameVer, Package
from gitsource.core.protocols import Source
from gitsource.sources.git.encodable import encode_checkout
from gitsource.sources.git.source import GitSource
from gitsource.sources.registry import GitSourceSpec, SourceRegistry


def register(group: click.Group) -> None:
    group.add_command(add)
    group.add_command(remove)
    group.add_command(list_sources)
    group.add_command(update)
    group.add_command(list_packages)
    group.add_command(get_package)
    group.add_command(show)


def _source(registry: SourceRegistry, name: str) -> GitSource:
    spec = registry.get(name)
    if spec is None:
        raise ValidationError(f"来源未注册: {name}")
    return registry.build(spec)


def _fetch(src: Source, wanted: list[NameVer]) -> list[Package]:
    src.download(wanted)
    return src.get(wanted)


@click.command()
@click.argument("name")
@click.argument("url")
@click.option("--ref", default="master", help="分支/tag/commit")
@click.option("--registry", default="", help="来源注册表路径")
@handle_errors
def add(name: str, url: str, ref: str, registry: str) -> None:
    """注册 git 来源"""
    SourceRegistry(registry).register(GitSourceSpec(name=name, url=url, ref=ref))
    click.echo(f"来源已注册: {name} -> {url} ({ref})")


@click.command()
@click.argument("name")
@click.option("--registry", default="", help="来源注册表路径")
@handle_errors
def remove(name: str, registry: str) -> None:
    """移除 git 来源（不删除本地镜像）"""
    if SourceRegistry(registry).remove(name):
        click.echo(f"来源已移除: {name}")
    else:
        click.echo(f"来源不存在: {name}")


@click.command(name="sources")
@click.option("--registry", default="", help="来源注册表路径")
@handle_errors
def list_sources(registry: str) -> None:
    """列出已注册的 git 来源"""
    specs = SourceRegistry(registry).load()
    if not specs:
        click.echo("没有已注册的来源。")
        return
    for spec in specs.values():
        click.echo(f"  {spec.name:20s} {spec.ref:16s} {spec.url}")


@click.command()
@click.argument("name", required=False)
@click.option("--registry", default="", help="来源注册表路径")
@handle_errors
def update(name: str | None, registry: str) -> None:
    """同步镜像并刷新工作树（不指定 NAME 则更新全部）"""
    reg = SourceRegistry(registry)
    names = [name] if name else list(reg.load())
    for n in names:
        src = _source(reg, n)
        src.update()
        co = src.last_checkout
        click.echo(f"就绪: {n} -> {src.checkout_path} @ {co.revision if co else '-'}")


@click.command(name="list")
@click.argument("name")
@click.option("--registry", default="", help="来源注册表路径")
@handle_errors
def list_packages(name: str, registry: str) -> None:
    """列出来源工作树中的包摘要"""
    for s in _source(SourceRegistry(registry), name).list():
        click.echo(f"  {s.name:20s} {s.version:12s} {s.description}")


@click.command(name="get")
@click.argument("name")
@click.argument("package")
@click.argument("version")
@click.option("--registry", default="", help="来源注册表路径")
@handle_errors
def get_package(name: str, package: str, version: str, registry: str) -> None:
    """按 name + version 查找来源中的包"""
    found = _fetch(_source(SourceRegistry(registry), name), [NameVer(package, version)])
    if not found:
        click.echo(f"未找到: {package}@{version}")
        return
    for pkg in found:
        click.echo(f"{pkg.name}@{pkg.version} -> {pkg.root}")


@click.command()
@click.argument("name")
@click.option("--json", "as_json", is_flag=True, default=False, help="以 JSON 输出")
@click.option("--registry", default="", help="来源注册表路径")
@handle_errors
def show(name: str, as_json: bool, registry: str) -> None:
    """更新来源并输出工作树的诊断视图"""
    src = _source(SourceRegistry(registry), name)
    src.update()
    if src.last_checkout is None:
        raise click.ClickException(f"来源未产生工作树: {name}")
    view = encode_checkout(src.last_checkout)
    if as_json:
        click.echo(json.dumps(view, ensure_ascii=False, indent=2))
    else:
        click.echo(yaml.safe_dump(view, allow_unicode=True, sort_keys=False).rstrip())
