#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Command-line interface for StrandHash.

This module provides the main CLI entry point and all subcommands for
computing strand- and rotation-invariant sequence digests.
"""

import logging
import os
import sys
from pathlib import Path

import click
from click.core import ParameterSource
import yaml

from .version import __version__
from .config.parser import ConfigValidationError
from .config.schema import (
    DEFAULT_KMER_SIZE,
    MAX_KMER_SIZE,
    MIN_KMER_SIZE,
    load_config,
    resolve_config,
    save_config_template,
    validate_config,
)
from .errors import StrandHashError
from .io.io_core_module import STDIN, read_records, write_digests
from .utils.pipeline import SequencePipeline

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool, quiet: bool):
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%H:%M:%S',
        stream=sys.stderr,
    )
    logging.getLogger('strandhash').setLevel(level)


def _exit_quietly_on_broken_pipe():
    # Point stdout at devnull so the interpreter's final flush cannot fail again
    try:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
    except (OSError, ValueError, AttributeError):
        pass
    sys.exit(0)


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--quiet', '-q', is_flag=True, help='Suppress non-error output')
@click.pass_context
def main(ctx, verbose, quiet):
    """
    StrandHash: strand- and rotation-invariant sequence digests

    Computes a 128-bit digest for every record of a FASTA/FASTQ file. The
    digest does not depend on which strand was sequenced and, optionally,
    on where a circular molecule was linearized.
    """
    ctx.ensure_object(dict)
    ctx.obj['VERBOSE'] = verbose
    ctx.obj['QUIET'] = quiet
    _setup_logging(verbose, quiet)


# ============================================================================
# Hashing Command
# ============================================================================

@main.command('hash')
@click.argument('inputs', nargs=-1, type=click.Path(dir_okay=False, allow_dash=True))
@click.option('--output', '-o', type=click.File('w'), default='-',
              help='Output file (default: stdout)')
@click.option('--config', '-c', 'config_file', type=click.Path(exists=True, dir_okay=False),
              help='Configuration file (YAML); command-line flags take precedence')
# ============================================================================
# Hashing Options
# ============================================================================
@click.option('--multi-kmer-hashing', '-m', is_flag=True,
              help='Instead of hashing the entire sequence at once, hash each k-mer '
                   'individually and then combine the resulting hashes')
@click.option('--xxhash', '-x', 'use_xxhash', is_flag=True,
              help='Replace ntHash with xxHash for hashing k-mers. '
                   'Works only with --multi-kmer-hashing')
@click.option('--kmer-size', '-k', type=click.IntRange(MIN_KMER_SIZE, MAX_KMER_SIZE),
              default=DEFAULT_KMER_SIZE, show_default=True,
              help='Size of the k-mers to hash when using --multi-kmer-hashing')
# ============================================================================
# Circular Sequence Options
# ============================================================================
@click.option('--circular-rotation', '-r', is_flag=True,
              help='Make hashing robust to circular permutations via deterministic '
                   'rotation to the lexicographically minimal sequence')
@click.option('--circular-kmers', '-w', is_flag=True,
              help='Make hashing robust to circular permutations via addition of the '
                   'k-mers that wrap around the end of the sequence. '
                   'Works only with --multi-kmer-hashing')
@click.pass_context
def hash_command(ctx, inputs, output, config_file, multi_kmer_hashing, use_xxhash,
                 kmer_size, circular_rotation, circular_kmers):
    """
    Compute hash digests for sequences in FASTA/FASTQ files.

    INPUTS are FASTA or FASTQ files, optionally gzipped. Use '-' (the
    default) to read from stdin. One line per record is written:
    accession, a tab, and the 32-character hex digest.
    """
    # Only flags given on the command line override the config file
    flag_keys = {
        'multi_kmer_hashing': ('hashing.multi_kmer_hashing', multi_kmer_hashing),
        'use_xxhash': ('hashing.use_xxhash', use_xxhash),
        'kmer_size': ('hashing.kmer_size', kmer_size),
        'circular_rotation': ('circular.rotation', circular_rotation),
        'circular_kmers': ('circular.kmers', circular_kmers),
    }
    overrides = {}
    for param, (key, value) in flag_keys.items():
        if ctx.get_parameter_source(param) == ParameterSource.COMMANDLINE:
            overrides[key] = value

    if circular_rotation and circular_kmers:
        raise click.UsageError(
            "--circular-rotation cannot be used with --circular-kmers", ctx=ctx
        )

    try:
        config = resolve_config(Path(config_file) if config_file else None, overrides)
    except ConfigValidationError as e:
        raise click.UsageError(str(e), ctx=ctx)

    if 'hashing.kmer_size' in overrides and not config.multi_kmer_hashing:
        raise click.UsageError("--kmer-size requires --multi-kmer-hashing", ctx=ctx)

    logger.debug(f"Hashing configuration: {config}")

    pipeline = SequencePipeline(config)
    sources = inputs or (STDIN,)

    try:
        for source in sources:
            logger.debug(f"Processing input: {source}")
            write_digests(pipeline.run(read_records(source)), output)
    except BrokenPipeError:
        _exit_quietly_on_broken_pipe()
    except (StrandHashError, FileNotFoundError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    logger.info(f"Hashed {pipeline.records_processed} records")


# ============================================================================
# Configuration Management Commands
# ============================================================================

@main.group()
def config():
    """Configuration management commands."""
    pass


@config.command('init')
@click.option('--output', '-o', type=click.Path(), default='strandhash_config.yaml',
              help='Output configuration file path')
def config_init(output):
    """Generate a template configuration file with all available parameters."""
    click.echo(f"Generating configuration template: {output}")

    try:
        save_config_template(Path(output))
    except OSError as e:
        click.echo(f"✗ Error creating configuration: {e}", err=True)
        sys.exit(1)

    click.echo(f"✓ Configuration file created: {output}")


@config.command('validate')
@click.argument('config_file', type=click.Path(exists=True))
def config_validate(config_file):
    """Validate a configuration file."""
    click.echo(f"Validating configuration file: {config_file}")

    try:
        config = load_config(Path(config_file))
    except ConfigValidationError as e:
        click.echo(f"✗ Error validating configuration: {e}", err=True)
        sys.exit(1)

    errors = validate_config(config)
    if errors:
        click.echo("\n✗ Configuration validation failed:")
        for error in errors:
            click.echo(f"  • {error}", err=True)
        sys.exit(1)

    click.echo("✓ Configuration is valid")


@config.command('show')
@click.argument('config_file', type=click.Path(exists=True))
@click.option('--format', '-f', type=click.Choice(['yaml', 'summary']), default='summary',
              help='Output format')
def config_show(config_file, format):
    """Display configuration settings."""
    try:
        config = load_config(Path(config_file))
    except ConfigValidationError as e:
        click.echo(f"✗ Error reading configuration: {e}", err=True)
        sys.exit(1)

    if format == 'yaml':
        click.echo(yaml.safe_dump(config, default_flow_style=False, sort_keys=False))
        return

    hashing = config.get('hashing', {})
    circular = config.get('circular', {})
    mode = 'multi-k-mer' if hashing.get('multi_kmer_hashing') else 'whole sequence'

    click.echo(f"Configuration from: {config_file}")
    click.echo("=" * 60)
    click.echo("\nHashing:")
    click.echo(f"  Mode: {mode}")
    if hashing.get('multi_kmer_hashing'):
        click.echo(f"  K-mer hash: {'xxHash' if hashing.get('use_xxhash') else 'ntHash'}")
        click.echo(f"  K-mer size: {hashing.get('kmer_size')}")
    click.echo("\nCircular sequences:")
    click.echo(f"  Rotation: {circular.get('rotation')}")
    click.echo(f"  Wrap-around k-mers: {circular.get('kmers')}")


if __name__ == '__main__':
    main()
