"""CLI commands for ImageChain."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from imagechain.models.config import ImageResolverConfig
from imagechain.models.image import ImageReference
from imagechain.models.request import PriorityOverride, ResolutionRequest
from imagechain.models.size import SizeSpec, parse_size
from imagechain.service import ImageService
from imagechain.store.memory import InMemoryContentStore
from imagechain.store.settings import InMemorySettingsStore, YamlSettingsStore
from imagechain.store.uploads import LocalUploadStorage

console = Console()


class SizeParamType(click.ParamType):
    """A preset name (thumbnail, medium, large, full) or WIDTHxHEIGHT."""

    name = "size"

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> SizeSpec:
        try:
            return parse_size(value)
        except ValueError as e:
            self.fail(str(e), param, ctx)


SIZE = SizeParamType()


def get_service(
    config_path: str | None,
    site_path: str | None,
    upload_dir: str,
    upload_url: str,
    settings_path: str | None,
) -> ImageService:
    config = ImageResolverConfig.from_yaml(Path(config_path)) if config_path else ImageResolverConfig()
    store = InMemoryContentStore.from_yaml(Path(site_path)) if site_path else InMemoryContentStore()
    settings = YamlSettingsStore(Path(settings_path)) if settings_path else InMemorySettingsStore()
    return ImageService(
        store=store,
        uploads=LocalUploadStorage(upload_dir, upload_url),
        settings=settings,
        config=config,
    )


@click.group()
@click.option("--config", "config_path", envvar="IMAGECHAIN_CONFIG", default=None, help="Resolver config YAML")
@click.option("--site", "site_path", envvar="IMAGECHAIN_SITE", default=None, help="Site content YAML")
@click.option("--upload-dir", default="./uploads", help="Directory for resized variants")
@click.option("--upload-url", default="/uploads", help="Base URL of the upload directory")
@click.option("--settings", "settings_path", default=None, help="Settings YAML with image_placeholder")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def main(
    ctx: click.Context,
    config_path: str | None,
    site_path: str | None,
    upload_dir: str,
    upload_url: str,
    settings_path: str | None,
    verbose: bool,
) -> None:
    """ImageChain - resolve and resize content images."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )
    ctx.ensure_object(dict)
    ctx.obj["service"] = get_service(config_path, site_path, upload_dir, upload_url, settings_path)
    ctx.call_on_close(ctx.obj["service"].close)


@main.command()
@click.argument("item_id", type=int, required=False)
@click.option("--size", "-s", type=SIZE, default=None, help="Image size")
@click.option("--attachment-id", "-a", type=int, default=None, help="Attachment to prefer")
@click.option("--meta-key", "-m", multiple=True, help="Meta key holding an image URL (can repeat)")
@click.option("--override", "-o", type=click.Choice([o.value for o in PriorityOverride]), default=None,
              help="Use only this source before falling back")
@click.option("--include-meta", is_flag=True, help="Show image dimensions")
@click.pass_context
def resolve(
    ctx: click.Context,
    item_id: int | None,
    size: SizeSpec | None,
    attachment_id: int | None,
    meta_key: tuple[str, ...],
    override: str | None,
    include_meta: bool,
) -> None:
    """Resolve the display image for a content item."""
    service: ImageService = ctx.obj["service"]

    request = ResolutionRequest(
        size=size,
        content_item_id=item_id,
        attachment_id=attachment_id,
        meta_key=list(meta_key) or None,
        priority_override=override,
        include_meta=include_meta,
    )
    result = service.resolve_image_uri(request)

    if isinstance(result, ImageReference):
        table = Table(title="Resolved Image")
        table.add_column("Field", style="cyan")
        table.add_column("Value", style="green")
        table.add_row("src", result.uri)
        if result.meta:
            table.add_row("width", str(result.meta.width))
            table.add_row("height", str(result.meta.height))
            table.add_row("mime_type", result.meta.mime_type or "-")
        console.print(table)
    else:
        console.print(result, soft_wrap=True)


@main.command()
@click.option("--size", "-s", type=SIZE, default=None, help="Placeholder size")
@click.pass_context
def placeholder(ctx: click.Context, size: SizeSpec | None) -> None:
    """Show the placeholder image URL."""
    service: ImageService = ctx.obj["service"]
    console.print(service.resolve_placeholder_uri(size), soft_wrap=True)


@main.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False))
@click.option("--size", "-s", type=SIZE, required=True, help="Target size")
@click.option("--filename", "-f", default=None, help="Variant file name (default: source name)")
@click.pass_context
def resize(ctx: click.Context, source: str, size: SizeSpec, filename: str | None) -> None:
    """Resize an image file into the variant cache."""
    service: ImageService = ctx.obj["service"]
    uri = service.resolve_resized_uri(source, size, filename)
    if uri is None:
        console.print("[red]Cannot resize this image[/red]")
        raise SystemExit(1)
    console.print(uri, soft_wrap=True)


@main.command()
@click.argument("item_id", type=int, required=False)
@click.option("--size", "-s", type=SIZE, default=None, help="Image size")
@click.pass_context
def tag(ctx: click.Context, item_id: int | None, size: SizeSpec | None) -> None:
    """Render an <img> tag for a content item."""
    service: ImageService = ctx.obj["service"]
    request = ResolutionRequest(size=size, content_item_id=item_id)
    click.echo(service.render_image_tag(request))


@main.group()
def cache() -> None:
    """Manage resized variants."""


@cache.command("stats")
@click.pass_context
def cache_stats(ctx: click.Context) -> None:
    """Show variant cache statistics."""
    service: ImageService = ctx.obj["service"]
    stats = service.get_variant_stats()

    console.print(f"[bold]Variants:[/bold] {stats['total_count']}")
    console.print(f"[bold]Total size:[/bold] {stats['total_size_bytes'] / 1024:.1f} KB")

    if stats["sizes"]:
        table = Table(title="By Size")
        table.add_column("Size", style="cyan")
        table.add_column("Count", justify="right", style="green")
        for prefix, count in sorted(stats["sizes"].items()):
            table.add_row(prefix, str(count))
        console.print(table)


@cache.command("clear")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.pass_context
def cache_clear(ctx: click.Context, yes: bool) -> None:
    """Delete all generated variants."""
    service: ImageService = ctx.obj["service"]

    if not yes and not click.confirm("Delete all generated variants?"):
        console.print("[yellow]Cancelled[/yellow]")
        return

    removed = service.clear_variants()
    console.print(f"[green]Removed {removed} variants[/green]")


if __name__ == "__main__":
    main()
