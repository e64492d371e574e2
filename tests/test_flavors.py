from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from flavorsel.flavors import (DEFAULTS, FlavorConfig, FlavorConfigError, config_from_dict, find_flavors_yml,
                               load_config, write_default_config)
from flavorsel.variant import (consumer_task_name, is_consumer_task, iter_variants, parse_consumer_task,
                               variant_name)


def test_defaults_without_descriptor(tmp_path: Path) -> None:
    cfg = load_config(tmp_path)
    assert cfg == FlavorConfig()
    assert cfg.flavors == ("dev", "prod")
    assert cfg.source_name("dev") == "google-services-dev.json"


def test_descriptor_is_found_in_parent(tmp_path: Path) -> None:
    app = tmp_path / "app"
    app.mkdir()
    (tmp_path / "flavors.yml").write_text("flavors: [dev, staging, prod]\n", encoding="utf-8")
    cfg = load_config(app)
    assert cfg.flavors == ("dev", "staging", "prod")
    assert cfg.default_flavor == "dev"
    assert cfg.path == (tmp_path / "flavors.yml").resolve()


def test_explicit_descriptor_must_exist(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        find_flavors_yml(tmp_path, "missing.yml")


@pytest.mark.parametrize("data", [
    {"flavors": []},
    {"source_pattern": "google-services.json"},
    {"source_pattern": "{flavor}", "target": "dev"},
    {"default_flavor": "qa"},
    {"flavors": ["dev", "dev"]},
    {"colour": "blue"},
    {"source_pattern": "google-services-{flavor}-{env}.json"},
    {"source_pattern": "google-services-{flavor}-{}.json"},
    {"source_pattern": "google-services-{flavor!x}.json"},
    {"strict": "false"},
    {"strict": "no"},
    {"strict": 1},
    {"source_pattern": "../{flavor}.json"},
    {"source_pattern": "config/google-services-{flavor}.json"},
    {"target": "../google-services.json"},
    {"target": ".."},
    {"flavors": ["dev", "../prod"], "default_flavor": "dev"},
])
def test_invalid_descriptors(data: dict) -> None:
    with pytest.raises(FlavorConfigError):
        config_from_dict(data)


def test_invalid_yaml(tmp_path: Path) -> None:
    (tmp_path / "flavors.yml").write_text("flavors: [dev\n", encoding="utf-8")
    with pytest.raises(FlavorConfigError):
        load_config(tmp_path)


def test_default_descriptor_round_trips(tmp_path: Path) -> None:
    path = write_default_config(tmp_path / "flavors.yml")
    assert yaml.safe_load(path.read_text(encoding="utf-8")) == DEFAULTS
    assert load_config(tmp_path) == FlavorConfig()


def test_variant_naming() -> None:
    assert variant_name("dev", "release") == "devRelease"
    assert variant_name("prod", "profileDebug") == "prodProfileDebug"
    assert list(iter_variants(FlavorConfig())) == [
        ("dev", "debug"), ("dev", "release"), ("prod", "debug"), ("prod", "release"),
    ]
    assert consumer_task_name(FlavorConfig(), "prod", "release") == "processProdReleaseGoogleServices"


def test_consumer_task_matching() -> None:
    cfg = FlavorConfig()
    assert is_consumer_task("processDevDebugGoogleServices", "process", "GoogleServices")
    assert not is_consumer_task("processGoogleServices", "process", "GoogleServices")
    assert not is_consumer_task("compileDevDebugKotlin", "process", "GoogleServices")
    assert parse_consumer_task("processDevDebugGoogleServices", cfg) == ("dev", "debug")
    assert parse_consumer_task("processReleaseGoogleServices", cfg) is None
    assert parse_consumer_task("processStagingReleaseGoogleServices", cfg) is None
