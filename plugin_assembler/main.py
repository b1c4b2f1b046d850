"""Command-line entry point for the plugin assembler."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Optional

import click

from plugin_assembler.modules.pluginassembly.domain import AssemblyError, AssemblyReport
from plugin_assembler.modules.pluginassembly.staging import inventory_plugins

from . import __version__
from .bootstrap import ServiceContainer, run_assembly
from .logging_config import configure_logging
from .settings import Settings, get_settings


def _report_payload(report: AssemblyReport) -> dict:
    payload = asdict(report)
    if report.inventory is not None:
        payload["inventory"]["languages"] = sorted(report.inventory.languages)
    return payload


def _echo_report(report: AssemblyReport) -> None:
    click.echo(f"Staging root:   {report.staging_root}")
    click.echo(f"Resources:      {report.output_dir} ({report.collected_files} files)")
    click.echo(f"Plugins:        {len(report.copied_plugins)}")
    for source, target in report.renamed.items():
        click.echo(f"  renamed {source} -> {target}")
    if report.omnisharp_classifiers:
        click.echo(f"Omnisharp:      {', '.join(report.omnisharp_classifiers)}")
    click.echo(f"ESLint bridge:  {report.eslint_bridge_files} files")
    if report.sloop_files:
        click.echo(f"Sloop:          {report.sloop_files} files")
    if report.skipped_stages:
        click.echo(click.style(f"Skipped:        {', '.join(report.skipped_stages)}", fg="yellow"))


@click.group()
@click.version_option(__version__, prog_name="plugin-assembler")
@click.option("--log-level", default=None, help="Override the configured log level.")
@click.pass_context
def cli(ctx: click.Context, log_level: Optional[str]) -> None:
    """Assemble analyzer plugins and bundled runtimes for the MCP server."""
    settings = ctx.obj if isinstance(ctx.obj, Settings) else get_settings()
    configure_logging(log_level or settings.log_level)
    ctx.obj = settings


@cli.command("assemble")
@click.option("--build-dir", type=click.Path(file_okay=False, path_type=Path), default=None)
@click.option("--output-dir", type=click.Path(file_okay=False, path_type=Path), default=None)
@click.option("--offline", is_flag=True, default=False, help="Only use the local dependency cache.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the report as JSON.")
@click.pass_obj
def assemble_cmd(
    settings: Settings,
    build_dir: Optional[Path],
    output_dir: Optional[Path],
    offline: bool,
    as_json: bool,
) -> None:
    """Resolve, stage and collect the plugin resources."""
    overrides = {}
    if build_dir is not None:
        overrides["build_dir"] = build_dir
    if output_dir is not None:
        overrides["resources_output_dir"] = output_dir
    if offline:
        overrides["offline"] = True
    if overrides:
        settings = settings.model_copy(update=overrides)

    container = ServiceContainer(settings)
    try:
        report = run_assembly(container)
    except AssemblyError as exc:
        raise click.ClickException(str(exc)) from exc
    finally:
        container.close()

    if as_json:
        click.echo(json.dumps(_report_payload(report), indent=2))
    else:
        _echo_report(report)


@cli.command("inventory")
@click.argument("plugins_dir", type=click.Path(exists=True, file_okay=False, path_type=Path))
def inventory_cmd(plugins_dir: Path) -> None:
    """List analyzers and languages enabled by a plugins directory."""
    inventory = inventory_plugins(plugins_dir)
    for name in inventory.plugin_files:
        click.echo(name)
    click.echo(f"Languages: {', '.join(sorted(inventory.languages)) or '-'}")


@cli.command("coordinates")
@click.pass_obj
def coordinates_cmd(settings: Settings) -> None:
    """Print the coordinates declared for the current settings."""
    container = ServiceContainer(settings.model_copy(update={"offline": True}))
    try:
        declared = container.declared()
    except AssemblyError as exc:
        raise click.ClickException(str(exc)) from exc
    for coords in declared.all():
        click.echo(coords.notation)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
