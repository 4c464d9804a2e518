"""
Main CLI entry point for docblocks.
"""

import json
import logging
import os
from dataclasses import asdict

import click

from docblocks import open_registry
from docblocks.core import Config
from docblocks.core.errors import DocBlocksError


class ClientError(click.ClickException):
    """Client-correctable failure (bad input, unknown file)."""

    exit_code = 2


class ServerError(click.ClickException):
    """Storage fault (missing block, corrupt block, I/O error)."""

    exit_code = 1


def to_click_error(error: DocBlocksError) -> click.ClickException:
    """Map a docblocks error to a ClickException with the right exit code."""
    if error.client_error:
        return ClientError(str(error))
    return ServerError(f"{type(error).__name__}: {error}")


def load_config(config_path, data_dir, block_size) -> Config:
    """Build Config from an optional JSON file plus command-line overrides."""
    if config_path:
        with open(config_path, "r") as f:
            config = Config(**json.load(f))
    else:
        config = Config()

    if data_dir is not None:
        config.data_dir = data_dir
    if block_size is not None:
        config.max_block_size = block_size
    return config


@click.group()
@click.option("--data-dir", type=click.Path(file_okay=False), default=None, help="Root of blocks/ and manifests/")
@click.option("--block-size", type=click.IntRange(min=1), default=None, help="Maximum block size in bytes")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), help="JSON config file")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, data_dir, block_size, config_path, verbose):
    """docblocks - Content-addressed block storage with keyword search."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = load_config(config_path, data_dir, block_size)
    ctx.obj = open_registry(config.data_dir, config)


def print_search_result(result, output_format):
    if output_format == "json":
        click.echo(json.dumps(asdict(result), indent=2))
    else:
        click.echo(f"{result.keyword}: {result.count} file(s)")
        for filename in result.found_in:
            click.echo(f"   {filename}")


@cli.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("--name", default=None, help="Store under this filename (single file only)")
@click.option("--query", "-q", "queries", multiple=True, help="Keyword to look up after uploading")
@click.option("--format", "output_format", default="text", type=click.Choice(["text", "json"]))
@click.pass_obj
def upload(registry, files, name, queries, output_format):
    """Upload files, storing each under its basename."""
    if name is not None and len(files) != 1:
        raise click.UsageError("--name can only be used with a single file")

    try:
        for path in files:
            filename = name or os.path.basename(path)
            with open(path, "rb") as f:
                blocks = registry.ingest(filename, f)
            click.echo(f"{filename}: stored {blocks} block(s)")

        for keyword in queries:
            print_search_result(registry.search_keyword(keyword), output_format)
    except DocBlocksError as e:
        raise to_click_error(e) from e


@cli.command()
@click.argument("filename")
@click.option("--output", "-o", type=click.Path(dir_okay=False), default=None, help="Write to file instead of stdout")
@click.pass_obj
def download(registry, filename, output):
    """Reconstruct a stored file."""
    try:
        # Manifest is loaded before the output file is opened
        blocks = registry.retrieve(filename)
        if output is None:
            sink = click.get_binary_stream("stdout")
            for block in blocks:
                sink.write(block)
            sink.flush()
        else:
            written = 0
            try:
                with open(output, "wb") as sink:
                    for block in blocks:
                        sink.write(block)
                        written += len(block)
            except DocBlocksError:
                os.remove(output)
                raise
            click.echo(f"Wrote {written} bytes to {output}", err=True)
    except DocBlocksError as e:
        raise to_click_error(e) from e


@cli.command()
@click.argument("keyword")
@click.option("--format", "output_format", default="text", type=click.Choice(["text", "json"]))
@click.pass_obj
def search(registry, keyword, output_format):
    """Find the files whose content contains KEYWORD."""
    try:
        rebuild = registry.rebuild_index()
        result = registry.search_keyword(keyword)
    except DocBlocksError as e:
        raise to_click_error(e) from e

    for filename in rebuild.skipped_files:
        click.echo(f"Warning: skipped unreadable file {filename}", err=True)
    print_search_result(result, output_format)


@cli.command()
@click.option("--format", "output_format", default="text", type=click.Choice(["text", "json"]))
@click.pass_obj
def stats(registry, output_format):
    """Show what the store holds."""
    store_stats = registry.stats()

    if output_format == "json":
        click.echo(json.dumps(asdict(store_stats), indent=2))
    else:
        click.echo(f"Blocks: {store_stats.total_blocks}")
        click.echo(f"Block bytes: {store_stats.total_bytes}")
        click.echo(f"Files: {store_stats.total_files}")
        click.echo(f"Keywords: {store_stats.total_keywords}")


def main():
    cli(prog_name="docblocks")


if __name__ == "__main__":
    main()
