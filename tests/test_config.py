"""Tests for TOML config file loading."""

from __future__ import annotations

import argparse
from pathlib import Path

import pytest

from unescaper.cli import build_parser, load_config, resolve_options
from unescaper.tokens import Dialect


class TestLoadConfig:
    def test_missing_config_returns_empty(self, tmp_path: Path) -> None:
        assert load_config(None, tmp_path) == {}

    def test_explicit_path(self, tmp_path: Path) -> None:
        cfg = tmp_path / "custom.toml"
        cfg.write_text('dialect = "byte"\n')
        result = load_config(cfg, tmp_path)
        assert result["dialect"] == "byte"

    def test_auto_discover_unescaper_toml(self, tmp_path: Path) -> None:
        cfg = tmp_path / "unescaper.toml"
        cfg.write_text("strict = true\n")
        result = load_config(None, tmp_path)
        assert result["strict"] is True


class TestConfigMerge:
    def _options(self, tmp_path: Path, *argv: str):
        doc = tmp_path / "in.txt"
        doc.write_text("")
        ns = build_parser().parse_args([str(doc), *argv])
        return resolve_options(ns)

    def test_defaults_without_config(self, tmp_path: Path) -> None:
        opts = self._options(tmp_path)
        assert opts.dialect == Dialect.UNICODE
        assert opts.strict is False
        assert opts.output_file is None

    def test_config_dialect(self, tmp_path: Path) -> None:
        (tmp_path / "unescaper.toml").write_text('dialect = "ascii"\n')
        opts = self._options(tmp_path)
        assert opts.dialect == Dialect.ASCII

    def test_cli_overrides_config_dialect(self, tmp_path: Path) -> None:
        (tmp_path / "unescaper.toml").write_text('dialect = "ascii"\n')
        opts = self._options(tmp_path, "-d", "quote")
        assert opts.dialect == Dialect.QUOTE

    def test_config_strict(self, tmp_path: Path) -> None:
        (tmp_path / "unescaper.toml").write_text("strict = true\n")
        opts = self._options(tmp_path)
        assert opts.strict is True

    def test_non_bool_strict_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "unescaper.toml").write_text('strict = "yes"\n')
        opts = self._options(tmp_path)
        assert opts.strict is False

    def test_explicit_config_flag(self, tmp_path: Path) -> None:
        cfg = tmp_path / "alt.toml"
        cfg.write_text('dialect = "byte"\n')
        opts = self._options(tmp_path, "--config", str(cfg))
        assert opts.dialect == Dialect.BYTE

    def test_invalid_dialect_in_config(self, tmp_path: Path) -> None:
        (tmp_path / "unescaper.toml").write_text('dialect = "latin1"\n')
        with pytest.raises(argparse.ArgumentTypeError, match="latin1"):
            self._options(tmp_path)

    def test_malformed_toml(self, tmp_path: Path) -> None:
        (tmp_path / "unescaper.toml").write_text("dialect = \n")
        with pytest.raises(argparse.ArgumentTypeError, match="invalid config file"):
            self._options(tmp_path)

    def test_stdin_discovers_config_in_cwd(self, tmp_path: Path, monkeypatch) -> None:
        (tmp_path / "unescaper.toml").write_text('dialect = "byte"\n')
        monkeypatch.chdir(tmp_path)
        opts = resolve_options(build_parser().parse_args(["-"]))
        assert opts.input_file is None
        assert opts.dialect == Dialect.BYTE
