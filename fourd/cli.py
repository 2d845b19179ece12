#!/usr/bin/env python3
"""CLI for the Malaysia 4D interactive site builder."""

import asyncio
import sys
from pathlib import Path
from typing import Optional

import click
import yaml

from fourd.analysis import top_numbers
from fourd.config.settings import Config
from fourd.errors import BuilderError
from fourd.scraper.main import SiteBuilder
from fourd.scraper.models import Company
from fourd.storage.csv_emitter import read_partition
from fourd.utils.logger import configure_logging, get_logger

logger = get_logger(__name__)


def _load_config(ctx) -> Config:
    try:
        config = Config(ctx.obj['config_path'])
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise click.ClickException(f"Invalid configuration: {e}")
    configure_logging(
        config.log_level,
        config.log_file,
        config.log_max_size_mb,
        config.log_backup_count
    )
    return config


@click.group()
@click.option('--config', default=None, help='Path to the YAML config file (defaults to the bundled site.yaml)')
@click.pass_context
def cli(ctx, config):
    """Generate the offline-capable Malaysia 4D tracker site."""
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config


@cli.command()
@click.option('--project-name', default=None, help='Workspace directory and archive name')
@click.option('--source-url', default=None, help='Results sheet URL (JSON array of rows)')
@click.option('--output-dir', type=click.Path(file_okay=False), default=None,
              help='Where the workspace and the archive are created')
@click.option('--archive/--no-archive', default=None, help='Package the workspace into <project>.zip')
@click.pass_context
def build(ctx, project_name: Optional[str], source_url: Optional[str],
          output_dir: Optional[str], archive: Optional[bool]):
    """Build the site workspace, fetch results and package it."""
    config = _load_config(ctx)

    # Override config from CLI
    config.override('project', 'name', project_name)
    config.override('source', 'url', source_url)
    config.override('output', 'root_dir', output_dir)
    config.override('output', 'archive_dir', output_dir)
    config.override('output', 'archive', archive)

    click.echo(f"\n🎰 Building {config.project_name}")
    click.echo(f"   Source: {config.source_url}")
    click.echo(f"   Workspace: {config.workspace_dir}")
    click.echo("=" * 80)

    try:
        result = asyncio.run(SiteBuilder(config).run())
    except KeyboardInterrupt:
        click.echo("\n\n⚠️  Interrupted by user")
        sys.exit(0)
    except BuilderError as e:
        click.echo(f"\n❌ {e.stage} error: {e}", err=True)
        sys.exit(1)

    click.echo("\n" + "=" * 80)
    click.echo("✅ Build completed")
    click.echo(f"   Rows fetched: {result.rows_fetched:,}")
    for key, count in result.rows_per_company.items():
        click.echo(f"   {key}.csv: {count:,} rows")
    if result.archive:
        click.echo(f"   Archive: {result.archive.path} ({result.archive.size_bytes:,} bytes)")


@cli.command()
@click.option('--project-dir', type=click.Path(file_okay=False), default=None,
              help='Generated workspace (defaults to the configured one)')
@click.option('--top', type=int, default=10, help='How many frequent numbers to list')
@click.pass_context
def stats(ctx, project_dir: Optional[str], top: int):
    """Show row counts and the most frequent numbers per company."""
    config = _load_config(ctx)
    data_dir = Path(project_dir or config.workspace_dir) / 'data'

    click.echo("\n📊 4D RESULTS")
    click.echo("=" * 80)

    found = False
    for company in Company:
        path = data_dir / company.filename
        if not path.exists():
            click.echo(f"\n{company.label}: no data ({path} missing)")
            continue
        found = True
        try:
            records = read_partition(path)
        except BuilderError as e:
            click.echo(f"❌ {e}", err=True)
            sys.exit(1)

        click.echo(f"\n{company.label}: {len(records):,} draws")
        for number, count in top_numbers(records, top):
            click.echo(f"   {number}: {count}")

    if not found:
        click.echo("\n⚠️  No CSV files found, run 'fourd build' first")


@cli.command()
def companies():
    """List the known 4D operators."""
    for company in Company:
        click.echo(f"{company.key:10} {company.label}")


if __name__ == '__main__':
    cli()
