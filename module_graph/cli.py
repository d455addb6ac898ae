"""Click CLI with graph, circular, depends and orphans subcommands."""

from __future__ import annotations

import functools
import logging
import re
from pathlib import Path

import click

from module_graph import __version__
from module_graph.analysis.graph_models import ModuleGraph
from module_graph.errors import ModuleGraphError
from module_graph.models import GraphConfig
from module_graph.paths import absolute
from module_graph.pipeline import build_graph


def graph_options(func):
    """Options shared by every subcommand that builds a graph."""
    @click.argument("roots", nargs=-1, required=True, type=click.Path(exists=True, path_type=Path))
    @click.option("--exclude", "-x", help="Regular expression of module ids to leave out")
    @click.option("--extension", "-e", "extensions", multiple=True,
                  help="Extension tried when resolving a require() (repeatable, default .js)")
    @click.option("--skip-dir", "skip_dirs", multiple=True, help="Directory glob to skip (repeatable)")
    @click.option("--path", "search_paths", multiple=True, type=click.Path(file_okay=False, path_type=Path),
                  help="Extra directory searched for bare module names (repeatable)")
    @click.option("--break-on-error", is_flag=True, help="Abort on the first unreadable or unresolvable file")
    @click.option("--workers", "-j", type=click.IntRange(min=1), default=1, help="Parse files in parallel")
    @click.option("--verbose", "-v", is_flag=True, help="Log progress to stderr")
    @functools.wraps(func)
    def wrapper(roots, exclude, extensions, skip_dirs, search_paths, break_on_error, workers, verbose, **kwargs):
        if verbose:
            logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

        config = GraphConfig(
            exclude=exclude,
            break_on_error=break_on_error,
            skip_dirs=list(skip_dirs),
            paths=[absolute(p) for p in search_paths],
            workers=workers,
        )
        if extensions:
            config.extensions = [ext if ext.startswith(".") else f".{ext}" for ext in extensions]
        try:
            config.exclude_regex
        except re.error as e:
            raise click.BadParameter(str(e), param_hint="--exclude")

        try:
            graph = build_graph(list(roots), config)
        except ModuleGraphError as e:
            raise click.ClickException(str(e))
        return func(graph, **kwargs)

    return wrapper


@click.group()
@click.version_option(version=__version__)
def cli():
    """module-graph: dependency graphs for CommonJS source trees."""


@cli.command()
@graph_options
@click.option("--format", "-f", "output_format", type=click.Choice(["json", "text"]), default="json",
              help="Output format")
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path), help="Write to a file")
def graph(result: ModuleGraph, output_format: str, output: Path | None):
    """Print the dependency graph of ROOTS."""
    if output_format == "json":
        text = result.to_json()
    else:
        text = _format_text(result)

    if output:
        output.write_text(text + "\n", encoding="utf-8")
        click.echo(f"Wrote {len(result)} module(s) to {output}")
    else:
        click.echo(text)


@cli.command()
@graph_options
def circular(result: ModuleGraph):
    """List circular dependencies; exit status 1 when any exist."""
    cycles = result.circular()
    if not cycles:
        click.echo(click.style("No circular dependencies found.", fg="green"))
        return

    click.echo(click.style(f"Found {len(cycles)} circular dependenc{'y' if len(cycles) == 1 else 'ies'}:\n", fg="red"))
    for i, cycle in enumerate(cycles, 1):
        click.echo(f"  {i}) " + click.style(" -> ".join(cycle), fg="yellow"))
    raise click.exceptions.Exit(1)


@cli.command()
@click.argument("module_id")
@graph_options
def depends(result: ModuleGraph, module_id: str):
    """List modules that depend on MODULE_ID."""
    dependents = result.depends(module_id)
    if not dependents:
        click.echo(f"Nothing depends on {module_id}.")
        return
    for dependent in dependents:
        click.echo(dependent)


@cli.command()
@graph_options
def orphans(result: ModuleGraph):
    """List modules that no other module depends on."""
    for orphan in result.orphans():
        click.echo(orphan)


def _format_text(graph: ModuleGraph) -> str:
    lines: list[str] = []
    for module_id, deps in graph.tree.items():
        lines.append(click.style(module_id, fg="cyan"))
        for dep in deps:
            color = "white" if dep in graph.tree else "bright_black"
            lines.append("  " + click.style(dep, fg=color))
    return "\n".join(lines)


if __name__ == "__main__":
    cli()
