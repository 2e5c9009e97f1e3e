"""Tests for configuration loading, options and diagnostics."""

import logging
from pathlib import Path

import pytest
import yaml

from doxyweave.deep_merge import deep_merge
from doxyweave.diagnostics import Diagnostics
from doxyweave.errors import ConfigError
from doxyweave.load_config import DEFAULT_CONFIG, load_config
from doxyweave.options import SIDEBAR_COLLECTIONS, Options


def test_deep_merge_scalars() -> None:
    """Verify scalar replacement in deep merge."""
    base = {"a": 1, "b": 2}
    update = {"b": 3, "c": 4}
    merged = deep_merge(base, update)
    assert merged == {"a": 1, "b": 3, "c": 4}


def test_deep_merge_nested() -> None:
    """Verify recursive merging of dictionaries."""
    base = {"nested": {"x": 1, "y": 2}}
    update = {"nested": {"y": 3, "z": 4}}
    merged = deep_merge(base, update)
    assert merged == {"nested": {"x": 1, "y": 3, "z": 4}}
    assert base == {"nested": {"x": 1, "y": 2}}


def test_deep_merge_arrays_replace() -> None:
    """Verify that arrays are replaced."""
    merged = deep_merge({"arr": [1, 2]}, {"arr": [3]})
    assert merged == {"arr": [3]}


def test_load_config_defaults() -> None:
    """Verify that default config is loaded when no path is provided."""
    config = load_config(None)
    assert config == DEFAULT_CONFIG
    assert config is not DEFAULT_CONFIG


def test_load_config_with_file(tmp_path: Path) -> None:
    """Verify that user config correctly overrides defaults."""
    config_file = tmp_path / "config.yml"
    user = {"output_format": "html", "front_matter": {"layout": "api"}}
    config_file.write_text(yaml.safe_dump(user), encoding="utf-8")
    config = load_config(config_file)
    assert config["output_format"] == "html"
    assert config["front_matter"] == {"layout": "api"}
    assert config["base_url"] == "/api/"


def test_load_config_missing_file(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """Verify that a missing file logs a warning and falls back to defaults."""
    with caplog.at_level(logging.WARNING):
        config = load_config(tmp_path / "missing.yml")
    assert config == DEFAULT_CONFIG
    assert "not found" in caplog.text


@pytest.mark.parametrize("content", ["a: [1, 2", "- just\n- a list\n"])
def test_load_config_rejects_bad_files(tmp_path: Path, content: str) -> None:
    """Verify that invalid YAML and non-mapping documents are rejected."""
    config_file = tmp_path / "config.yml"
    config_file.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(config_file)


def test_options_from_defaults() -> None:
    """Verify the options built from the default configuration."""
    options = Options.from_config(load_config(None))
    assert options == Options()
    assert options.sidebar_collections == SIDEBAR_COLLECTIONS


def test_options_normalize_base_url() -> None:
    """Verify that the base URL always ends with a slash."""
    options = Options.from_config({"base_url": "https://example.org/docs"})
    assert options.base_url == "https://example.org/docs/"


@pytest.mark.parametrize(
    "config",
    [
        {"output_format": "rst"},
        {"sidebar_collections": ["classes", "modules"]},
        {"workers": 0},
    ],
)
def test_options_reject_invalid_values(config: dict[str, object]) -> None:
    """Verify that invalid settings raise a configuration error."""
    with pytest.raises(ConfigError):
        Options.from_config(config)


def test_diagnostics_record_and_log(caplog: pytest.LogCaptureFixture) -> None:
    """Verify that diagnostics are kept and forwarded to the logger."""
    diagnostics = Diagnostics()
    with caplog.at_level(logging.DEBUG):
        diagnostics.info("found %d files", 3)
        diagnostics.warning("cannot resolve %s", "x", refid="classx")
        diagnostics.error("broken")
    assert [d.message for d in diagnostics.entries] == [
        "found 3 files",
        "cannot resolve x",
        "broken",
    ]
    assert diagnostics.warnings[0].refid == "classx"
    assert [d.message for d in diagnostics.errors] == ["broken"]
    assert "cannot resolve x" in caplog.text
