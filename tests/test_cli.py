#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
StrandHash v0.1.0

Tests for CLI command interface.

Author: StrandHash Development Team
License: MIT - See LICENSE
"""

import io
import os
import subprocess
import sys
from pathlib import Path

import pytest
import xxhash
from click.testing import CliRunner
from strandhash import cli
from strandhash.cli import main
from strandhash.io.io_core_module import write_digests

REPO_ROOT = Path(__file__).resolve().parent.parent


def _write(path, content):
    with open(path, 'w') as f:
        f.write(content)


def _parse_lines(output):
    return [line.split('\t') for line in output.strip().splitlines()]


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_cli_help(self):
        """Test that --help runs without error."""
        runner = CliRunner()
        result = runner.invoke(main, ['--help'])

        assert result.exit_code == 0
        assert 'StrandHash' in result.output

    def test_cli_version(self):
        """Test that --version displays version."""
        runner = CliRunner()
        result = runner.invoke(main, ['--version'])

        assert result.exit_code == 0
        assert '0.1' in result.output

    def test_hash_help(self):
        runner = CliRunner()
        result = runner.invoke(main, ['hash', '--help'])

        assert result.exit_code == 0
        assert '--multi-kmer-hashing' in result.output
        assert '--circular-rotation' in result.output

    def test_invalid_command(self):
        """Test that invalid commands are handled gracefully."""
        runner = CliRunner()
        result = runner.invoke(main, ['nonexistent_command'])

        assert result.exit_code != 0


class TestHashCommand:
    """Test the hash command end to end."""

    def test_hash_fasta_file(self, fasta_file):
        runner = CliRunner()
        result = runner.invoke(main, ['hash', str(fasta_file)])

        assert result.exit_code == 0
        lines = _parse_lines(result.output)
        assert [acc for acc, _ in lines] == ['seq1', 'seq2']
        assert all(len(digest) == 32 for _, digest in lines)

    def test_palindrome_digest_value(self):
        runner = CliRunner()
        result = runner.invoke(main, ['hash', '-'], input='>x\nACGT\n')

        assert result.exit_code == 0
        assert result.output == f"x\t{xxhash.xxh3_128_hexdigest(b'ACGT')}\n"

    def test_stdin_is_default(self):
        runner = CliRunner()
        result = runner.invoke(main, ['hash'], input='>x\nACGT\n')

        assert result.exit_code == 0
        assert result.output.startswith('x\t')

    def test_reverse_complement_same_digest(self, temp_output_dir):
        path = temp_output_dir / "strands.fa"
        _write(path, ">fwd\nGATTACAGATTACA\n>rev\nTGTAATCTGTAATC\n")

        runner = CliRunner()
        result = runner.invoke(main, ['hash', str(path)])

        assert result.exit_code == 0
        (_, fwd), (_, rev) = _parse_lines(result.output)
        assert fwd == rev

    @pytest.mark.parametrize("flags", [
        ['-r'],
        ['-r', '-m', '-k', '5'],
        ['-m', '-w', '-k', '5'],
        ['-m', '-x', '-w', '-k', '5'],
    ])
    def test_circular_rotations_same_digest(self, temp_output_dir, flags):
        path = temp_output_dir / "circular.fa"
        _write(path, ">a\nACGTTGCAAGGCT\n>b\nGCAAGGCTACGTT\n>c\nAGCCTTGCAACGT\n")

        runner = CliRunner()
        result = runner.invoke(main, ['hash', *flags, str(path)])

        assert result.exit_code == 0, result.output
        digests = {digest for _, digest in _parse_lines(result.output)}
        assert len(digests) == 1

    def test_multiple_inputs(self, fasta_file, gzipped_fasta_file):
        runner = CliRunner()
        result = runner.invoke(main, ['hash', str(fasta_file), str(gzipped_fasta_file)])

        assert result.exit_code == 0
        lines = _parse_lines(result.output)
        assert len(lines) == 4
        assert lines[:2] == lines[2:]

    def test_output_file(self, fasta_file, temp_output_dir):
        out = temp_output_dir / "digests.tsv"
        runner = CliRunner()
        result = runner.invoke(main, ['hash', '-o', str(out), str(fasta_file)])

        assert result.exit_code == 0
        assert len(out.read_text().splitlines()) == 2


class TestHashCommandErrors:
    """Test option constraints and fail-fast errors."""

    @pytest.mark.parametrize("flags", [
        ['-x'],
        ['-w'],
        ['-k', '21'],
        ['-r', '-w', '-m'],
        ['-m', '-k', '0'],
        ['-m', '-k', '256'],
    ])
    def test_invalid_flag_combinations(self, fasta_file, flags):
        runner = CliRunner()
        result = runner.invoke(main, ['hash', *flags, str(fasta_file)])

        assert result.exit_code == 2

    def test_too_short_record(self, temp_output_dir):
        path = temp_output_dir / "short.fa"
        _write(path, ">ok\n" + "A" * 40 + "\n>tiny\nACGT\n")

        runner = CliRunner()
        result = runner.invoke(main, ['hash', '-m', str(path)])

        assert result.exit_code == 1
        assert 'record tiny is shorter than the k-mer size' in result.output

    def test_invalid_header(self, temp_output_dir):
        path = temp_output_dir / "header.fa"
        _write(path, "> no accession\nACGT\n")

        runner = CliRunner()
        result = runner.invoke(main, ['hash', str(path)])

        assert result.exit_code == 1
        assert 'invalid header' in result.output

    def test_empty_input_file(self, temp_output_dir):
        path = temp_output_dir / "empty.fa"
        _write(path, "")

        runner = CliRunner()
        result = runner.invoke(main, ['hash', str(path)])

        assert result.exit_code == 1
        assert 'the input file is empty' in result.output

    def test_nonexistent_input(self):
        runner = CliRunner()
        result = runner.invoke(main, ['hash', 'nonexistent.fasta'])

        assert result.exit_code == 1
        assert 'not found' in result.output

    def test_truncated_fastq_record(self, temp_output_dir):
        path = temp_output_dir / "truncated.fastq"
        _write(path, "@r1\nACGT\n+\nII\n")

        runner = CliRunner()
        result = runner.invoke(main, ['hash', str(path)])

        assert result.exit_code == 1
        assert 'Error:' in result.output
        assert 'Traceback' not in result.output

    def test_invalid_gzip_input(self, temp_output_dir):
        path = temp_output_dir / "x.fa.gz"
        _write(path, ">a\nACGT\n")

        runner = CliRunner()
        result = runner.invoke(main, ['hash', str(path)])

        assert result.exit_code == 1
        assert 'Error:' in result.output


class _ClosedPipe(io.StringIO):
    def write(self, s):
        raise BrokenPipeError(32, "Broken pipe")


class TestBrokenPipe:
    """Test that a closed downstream reader ends the run quietly."""

    def test_broken_pipe_exits_zero(self, fasta_file, monkeypatch):
        def write_to_closed_pipe(results, handle):
            return write_digests(results, _ClosedPipe())

        monkeypatch.setattr(cli, 'write_digests', write_to_closed_pipe)

        runner = CliRunner()
        result = runner.invoke(main, ['hash', str(fasta_file)])

        assert result.exit_code == 0
        assert 'Error:' not in result.output

    def test_closed_reader_subprocess(self, temp_output_dir):
        path = temp_output_dir / "many.fa"
        _write(path, "".join(f">r{i}\nACGTACGTAC\n" for i in range(20000)))

        env = dict(os.environ)
        env['PYTHONPATH'] = os.pathsep.join(
            p for p in (str(REPO_ROOT), env.get('PYTHONPATH')) if p
        )
        proc = subprocess.Popen(
            [sys.executable, '-m', 'strandhash.cli', 'hash', str(path)],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            env=env,
        )
        assert proc.stdout.readline().startswith(b'r0\t')
        proc.stdout.close()
        _, stderr = proc.communicate(timeout=60)

        assert proc.returncode == 0
        assert b'Traceback' not in stderr


class TestConfigCommands:
    """Test configuration management commands."""

    def test_config_init_and_validate(self):
        runner = CliRunner()

        with runner.isolated_filesystem():
            result = runner.invoke(main, ['config', 'init', '--output', 'test_config.yaml'])
            assert result.exit_code == 0

            result = runner.invoke(main, ['config', 'validate', 'test_config.yaml'])
            assert result.exit_code == 0
            assert 'valid' in result.output

    def test_config_validate_rejects_bad_combination(self):
        runner = CliRunner()

        with runner.isolated_filesystem():
            _write('bad.yaml', "hashing:\n  use_xxhash: true\n")
            result = runner.invoke(main, ['config', 'validate', 'bad.yaml'])

            assert result.exit_code == 1
            assert 'use_xxhash requires' in result.output

    def test_config_show(self):
        runner = CliRunner()

        with runner.isolated_filesystem():
            _write('c.yaml', "hashing:\n  multi_kmer_hashing: true\n  kmer_size: 21\n")
            result = runner.invoke(main, ['config', 'show', 'c.yaml'])

            assert result.exit_code == 0
            assert 'K-mer size: 21' in result.output

    def test_hash_with_config_file(self, temp_output_dir):
        config_path = temp_output_dir / "c.yaml"
        _write(config_path, "hashing:\n  multi_kmer_hashing: true\n  kmer_size: 3\n")
        fasta_path = temp_output_dir / "in.fa"
        _write(fasta_path, ">x\nACGTA\n")

        runner = CliRunner()
        with_config = runner.invoke(main, ['hash', '-c', str(config_path), str(fasta_path)])
        with_flags = runner.invoke(main, ['hash', '-m', '-k', '3', str(fasta_path)])

        assert with_config.exit_code == 0
        assert with_config.output == with_flags.output

    def test_flags_override_config_file(self, temp_output_dir):
        config_path = temp_output_dir / "c.yaml"
        _write(config_path, "hashing:\n  multi_kmer_hashing: true\n  kmer_size: 3\n")
        fasta_path = temp_output_dir / "in.fa"
        _write(fasta_path, ">x\nACGTACGT\n")

        runner = CliRunner()
        overridden = runner.invoke(main, ['hash', '-c', str(config_path), '-k', '4', str(fasta_path)])
        with_flags = runner.invoke(main, ['hash', '-m', '-k', '4', str(fasta_path)])

        assert overridden.exit_code == 0
        assert overridden.output == with_flags.output

# StrandHash v0.1.0
# Any usage is subject to this software's license.
