"""Tests for demo configuration loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from balanced_bst.config import DemoConfig, DemoConfigError, load_demo_config


def test_load_demo_config_defaults() -> None:
    config = load_demo_config(None)
    assert config == DemoConfig()
    assert (config.size, config.lower, config.upper) == (15, 1, 100)
    assert (config.extra_count, config.extra_lower, config.extra_upper) == (6, 101, 1000)
    assert config.seed is None


def test_load_demo_config_from_json(tmp_path: Path) -> None:
    config_path = tmp_path / "scenario.json"
    config_path.write_text(json.dumps({"size": 31, "seed": 4}), encoding="utf-8")

    config = load_demo_config(config_path)

    assert config.size == 31
    assert config.seed == 4
    assert config.upper == 100  # default when omitted


def test_load_demo_config_from_yaml(tmp_path: Path) -> None:
    config_path = tmp_path / "scenario.yaml"
    config_path.write_text(
        """
        size: 7
        lower: 10
        upper: 20
        extra_count: 3
        """,
        encoding="utf-8",
    )

    config = load_demo_config(str(config_path))

    assert (config.size, config.lower, config.upper, config.extra_count) == (7, 10, 20, 3)


def test_empty_yaml_document_uses_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "empty.yml"
    config_path.write_text("", encoding="utf-8")
    assert load_demo_config(config_path) == DemoConfig()


@pytest.mark.parametrize(
    "filename,content",
    [
        ("unknown.json", json.dumps({"depth": 3})),
        ("boolean.json", json.dumps({"size": True})),
        ("inverted.json", json.dumps({"lower": 50, "upper": 10})),
        ("negative.yaml", "extra_count: -1\n"),
        ("list.yaml", "- 1\n- 2\n"),
        ("broken.json", "{not json"),
        ("broken.yaml", "size: [1, 2\n"),
        ("scenario.toml", "size = 3\n"),
        ("intkey.yaml", "1: 2\n"),
    ],
)
def test_load_demo_config_rejects_invalid_documents(
    tmp_path: Path, filename: str, content: str
) -> None:
    config_path = tmp_path / filename
    config_path.write_text(content, encoding="utf-8")
    with pytest.raises(DemoConfigError):
        load_demo_config(config_path)


def test_load_demo_config_missing_file(tmp_path: Path) -> None:
    with pytest.raises(DemoConfigError):
        load_demo_config(tmp_path / "absent.yaml")


def test_with_overrides_skips_none_and_revalidates() -> None:
    config = DemoConfig()
    assert config.with_overrides(seed=None, size=None) is config
    assert config.with_overrides(size=3).size == 3
    with pytest.raises(DemoConfigError):
        config.with_overrides(extra_lower=5000)


def test_load_demo_config_rejects_undecodable_file(tmp_path: Path) -> None:
    config_path = tmp_path / "scenario.json"
    config_path.write_bytes(b"\xff\xfe{}")
    with pytest.raises(DemoConfigError, match="Cannot read configuration file"):
        load_demo_config(config_path)


def test_unknown_key_message_lists_non_string_keys(tmp_path: Path) -> None:
    config_path = tmp_path / "scenario.yaml"
    config_path.write_text("1: 2\nsize: 3\n", encoding="utf-8")
    with pytest.raises(DemoConfigError, match="Unknown configuration keys: 1"):
        load_demo_config(config_path)
