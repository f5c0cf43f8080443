"""Tests for TOML config file loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from minilisp.cli import build_parser, load_config, resolve_options
from minilisp.rules import DEFAULT_RULES
from minilisp.tokens import INT64_MAX, TokenKind


def _options(tmp_path: Path, config: str | None, *extra: str):
    if config is not None:
        (tmp_path / "minilisp.toml").write_text(config)
    src = tmp_path / "prog.lisp"
    src.write_text("")
    ns = build_parser().parse_args([str(src), *extra])
    return resolve_options(ns)


class TestLoadConfig:
    def test_missing_config_returns_empty(self, tmp_path: Path) -> None:
        assert load_config(None, tmp_path) == {}

    def test_explicit_path(self, tmp_path: Path) -> None:
        cfg = tmp_path / "custom.toml"
        cfg.write_text('[output]\nformat = "json"\n')
        result = load_config(cfg, tmp_path)
        assert result["output"] == {"format": "json"}

    def test_auto_discover_minilisp_toml(self, tmp_path: Path) -> None:
        cfg = tmp_path / "minilisp.toml"
        cfg.write_text("[lexer]\nmax-int = 10\n")
        result = load_config(None, tmp_path)
        assert result["lexer"] == {"max-int": 10}


class TestDefaults:
    def test_no_config(self, tmp_path: Path) -> None:
        opts = _options(tmp_path, None)
        assert opts.output_format == "text"
        assert opts.rules == DEFAULT_RULES
        assert opts.max_int == INT64_MAX
        assert opts.snippet_length == 20
        assert opts.output_file is None


class TestConfigMerge:
    def test_config_format(self, tmp_path: Path) -> None:
        opts = _options(tmp_path, '[output]\nformat = "json"\n')
        assert opts.output_format == "json"

    def test_cli_overrides_config_format(self, tmp_path: Path) -> None:
        opts = _options(tmp_path, '[output]\nformat = "json"\n', "-f", "text")
        assert opts.output_format == "text"

    def test_invalid_config_format(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="output format"):
            _options(tmp_path, '[output]\nformat = "yaml"\n')

    def test_config_max_int(self, tmp_path: Path) -> None:
        opts = _options(tmp_path, "[lexer]\nmax-int = 1000\n")
        assert opts.max_int == 1000

    def test_cli_overrides_config_max_int(self, tmp_path: Path) -> None:
        opts = _options(tmp_path, "[lexer]\nmax-int = 1000\n", "--max-int", "5")
        assert opts.max_int == 5

    def test_config_snippet_length(self, tmp_path: Path) -> None:
        opts = _options(tmp_path, "[lexer]\nsnippet-length = 8\n")
        assert opts.snippet_length == 8

    def test_config_rules_reorder(self, tmp_path: Path) -> None:
        opts = _options(tmp_path, '[lexer]\nrules = ["IDENTIFIER", "LEFT_PAREN"]\n')
        assert [r.kind for r in opts.rules] == [TokenKind.IDENTIFIER, TokenKind.LEFT_PAREN]

    def test_config_rules_unknown(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="unknown token kind"):
            _options(tmp_path, '[lexer]\nrules = ["MULTIPLY"]\n')

    @pytest.mark.parametrize(
        "config",
        [
            "[lexer]\nmax-int = true\n",
            "[lexer]\nmax-int = 0\n",
            "[lexer]\nmax-int = \"10\"\n",
            "[lexer]\nsnippet-length = false\n",
            "[lexer]\nsnippet-length = -3\n",
        ],
    )
    def test_invalid_integer_settings(self, tmp_path: Path, config: str) -> None:
        with pytest.raises(ValueError, match="positive integer"):
            _options(tmp_path, config)

    def test_rules_must_be_a_list(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="list of names"):
            _options(tmp_path, '[lexer]\nrules = "ADD"\n')

    def test_non_positive_cli_max_int(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="--max-int"):
            _options(tmp_path, None, "--max-int", "-1")

    def test_explicit_config_flag(self, tmp_path: Path) -> None:
        cfg = tmp_path / "other.toml"
        cfg.write_text('[output]\nformat = "json"\n')
        opts = _options(tmp_path, None, "--config", str(cfg))
        assert opts.output_format == "json"
