import asyncio
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from blogweave.core.config import BlogweaveConfig
from blogweave.core.context import BuildContext
from blogweave.core.exceptions import BlogweaveError
from blogweave.core.logging import configure_logging
from blogweave.engine.head_tags import render_head_tag
from blogweave.engine.pipeline import BuildStatus, inject_html_tags, paths_to_watch, run_build
from blogweave.infra import FileFeedSink, FileSystemRouteRegistry, FrontMatterPostLoader

app = typer.Typer(name="blogweave", help="Blogweave - blog listing, tag index and feed builder")

console = Console()

SiteDirArgument = typer.Argument(Path("."), help="Site directory containing .blogweave.toml.")


def _load_config(site_dir: Path) -> BlogweaveConfig:
    try:
        return BlogweaveConfig.load(site_dir.resolve())
    except (BlogweaveError, ValidationError) as exc:
        console.print(f"[bold red]Configuration error:[/] {exc}")
        raise typer.Exit(code=1) from exc


@app.callback()
def main(
    log_level: str | None = typer.Option(
        None, "--log-level", envvar="BLOGWEAVE_LOG_LEVEL", help="Logging level (default INFO)."
    ),
):
    configure_logging(log_level)


@app.command()
def build(site_dir: Path = SiteDirArgument):
    """
    Build post, list and tag units plus feed files.
    """
    config = _load_config(site_dir)
    try:
        result = asyncio.run(
            run_build(
                config,
                FrontMatterPostLoader(),
                FileSystemRouteRegistry(config.data_dir),
                FileFeedSink(config.site.abs_out_dir),
            )
        )
    except BlogweaveError as exc:
        console.print(f"[bold red]Build failed:[/] {exc}")
        raise typer.Exit(code=1) from exc

    if result.status is BuildStatus.NOTHING_TO_DO:
        console.print("[yellow]Nothing to do:[/] no blog posts found.")
        return

    table = Table(title="Blog build")
    table.add_column("Artifact", style="bold cyan")
    table.add_column("Count", justify="right")
    table.add_row("Posts", str(result.post_count))
    table.add_row("List pages", str(result.page_count))
    table.add_row("Tags", str(result.tag_count))
    table.add_row("Routes", str(result.route_count))
    table.add_row("Feeds", str(len(result.feed_paths)))
    console.print(table)
    for path in result.feed_paths:
        console.print(f"Feed written: {path}")


@app.command("head-tags")
def head_tags(site_dir: Path = SiteDirArgument):
    """
    Print the <link> tags advertising the configured feeds.
    """
    ctx = BuildContext(config=_load_config(site_dir))
    for tag in inject_html_tags(ctx):
        typer.echo(render_head_tag(tag))


@app.command("watch-paths")
def watch_paths(site_dir: Path = SiteDirArgument):
    """
    Print the glob patterns a watcher should observe.
    """
    ctx = BuildContext(config=_load_config(site_dir))
    for pattern in paths_to_watch(ctx):
        typer.echo(pattern)


if __name__ == "__main__":
    app()
