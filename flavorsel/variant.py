# flavorsel/variant.py
from __future__ import annotations

from typing import Iterator

from .flavors import FlavorConfig


def capitalize(s: str) -> str:
    # only the first letter; str.capitalize() would lower the rest
    return s[:1].upper() + s[1:]


def variant_name(flavor: str, build_type: str) -> str:
    """devRelease, prodDebug, ..."""
    return flavor + capitalize(build_type)


def iter_variants(cfg: FlavorConfig) -> Iterator[tuple[str, str]]:
    for flavor in cfg.flavors:
        for build_type in cfg.build_types:
            yield flavor, build_type


def consumer_task_name(cfg: FlavorConfig, flavor: str, build_type: str) -> str:
    return cfg.consumer_prefix + capitalize(variant_name(flavor, build_type)) + cfg.consumer_suffix


def is_consumer_task(name: str, prefix: str, suffix: str) -> bool:
    return len(name) > len(prefix) + len(suffix) and name.startswith(prefix) and name.endswith(suffix)


def parse_consumer_task(name: str, cfg: FlavorConfig) -> tuple[str, str] | None:
    """Map processDevReleaseGoogleServices to ("dev", "release").

    Returns None for tasks that are not consumers or that name a variant
    outside the configured flavor x build type matrix.
    """
    if not is_consumer_task(name, cfg.consumer_prefix, cfg.consumer_suffix):
        return None
    for flavor, build_type in iter_variants(cfg):
        if name == consumer_task_name(cfg, flavor, build_type):
            return flavor, build_type
    return None
