# flavorsel/flavors.py
from __future__ import annotations

import pathlib
from dataclasses import dataclass, field

import yaml

DESCRIPTOR_NAME = "flavors.yml"

DEFAULTS = {
    "dimension": "environment",
    "flavors": ["dev", "prod"],
    "build_types": ["debug", "release"],
    "default_flavor": "dev",
    "default_build_type": "debug",
    "source_pattern": "google-services-{flavor}.json",
    "target": "google-services.json",
    "consumer_prefix": "process",
    "consumer_suffix": "GoogleServices",
    "strict": False,
}


class FlavorConfigError(ValueError):
    pass


@dataclass(frozen=True)
class FlavorConfig:
    dimension: str = DEFAULTS["dimension"]
    flavors: tuple[str, ...] = tuple(DEFAULTS["flavors"])
    build_types: tuple[str, ...] = tuple(DEFAULTS["build_types"])
    default_flavor: str = DEFAULTS["default_flavor"]
    default_build_type: str = DEFAULTS["default_build_type"]
    source_pattern: str = DEFAULTS["source_pattern"]
    target: str = DEFAULTS["target"]
    consumer_prefix: str = DEFAULTS["consumer_prefix"]
    consumer_suffix: str = DEFAULTS["consumer_suffix"]
    strict: bool = DEFAULTS["strict"]
    path: pathlib.Path | None = field(default=None, compare=False)

    def source_name(self, flavor: str) -> str:
        return self.source_pattern.format(flavor=flavor)

    def check_flavor(self, flavor: str) -> str:
        if flavor not in self.flavors:
            raise FlavorConfigError(
                f"Unknown flavor '{flavor}'. Available flavors: {', '.join(self.flavors)}"
            )
        return flavor

    def check_build_type(self, build_type: str) -> str:
        if build_type not in self.build_types:
            raise FlavorConfigError(
                f"Unknown build type '{build_type}'. Available build types: {', '.join(self.build_types)}"
            )
        return build_type


def _as_names(value, key: str) -> tuple[str, ...]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)) or not value:
        raise FlavorConfigError(f"'{key}' must be a non-empty list")
    names = tuple(str(v).strip() for v in value)
    if any(not n for n in names):
        raise FlavorConfigError(f"'{key}' contains an empty name")
    if len(set(names)) != len(names):
        raise FlavorConfigError(f"'{key}' contains duplicates: {list(names)}")
    return names


def config_from_dict(data: dict | None, path: pathlib.Path | None = None) -> FlavorConfig:
    data = data or {}
    if not isinstance(data, dict):
        raise FlavorConfigError(f"Flavor descriptor must be a mapping: {path}")
    unknown = sorted(set(data) - set(DEFAULTS))
    if unknown:
        raise FlavorConfigError(f"Unknown keys in flavor descriptor: {unknown}")

    merged = {**DEFAULTS, **data}
    flavors = _as_names(merged["flavors"], "flavors")
    build_types = _as_names(merged["build_types"], "build_types")

    # defaults follow the declared lists when not given explicitly
    default_flavor = str(data.get("default_flavor", flavors[0]))
    default_build_type = str(data.get("default_build_type", build_types[0]))

    pattern = str(merged["source_pattern"])
    if "{flavor}" not in pattern:
        raise FlavorConfigError(f"source_pattern must contain '{{flavor}}': {pattern!r}")
    try:
        rendered = [pattern.format(flavor=f) for f in flavors]
    except (KeyError, IndexError, AttributeError, ValueError) as e:
        raise FlavorConfigError(f"Invalid source_pattern {pattern!r}: {e!r}") from e
    target = str(merged["target"])
    if target in rendered:
        raise FlavorConfigError(f"source_pattern renders to the target name '{target}'")
    # both files live in the selection directory
    for name in [target, *rendered]:
        if not name or "/" in name or "\\" in name or name in (".", ".."):
            raise FlavorConfigError(f"File names must stay inside the directory: {name!r}")

    if not isinstance(merged["strict"], bool):
        raise FlavorConfigError(f"'strict' must be true or false, not {merged['strict']!r}")

    cfg = FlavorConfig(
        dimension=str(merged["dimension"]),
        flavors=flavors,
        build_types=build_types,
        default_flavor=default_flavor,
        default_build_type=default_build_type,
        source_pattern=pattern,
        target=target,
        consumer_prefix=str(merged["consumer_prefix"]),
        consumer_suffix=str(merged["consumer_suffix"]),
        strict=merged["strict"],
        path=path,
    )
    cfg.check_flavor(cfg.default_flavor)
    cfg.check_build_type(cfg.default_build_type)
    return cfg


def find_flavors_yml(root: pathlib.Path, arg_path: str | None = None) -> pathlib.Path | None:
    """Locate the descriptor; an explicit path must exist, the fallbacks may not."""
    if arg_path:
        p = pathlib.Path(arg_path)
        p = p if p.is_absolute() else (root / p)
        p = p.resolve()
        if not p.exists():
            raise FileNotFoundError(f"Flavor descriptor not found: {p}")
        return p
    for c in (root / DESCRIPTOR_NAME, root.parent / DESCRIPTOR_NAME):
        if c.exists():
            return c.resolve()
    return None


def load_config(root: pathlib.Path, arg_path: str | None = None) -> FlavorConfig:
    path = find_flavors_yml(root, arg_path)
    if path is None:
        return FlavorConfig()
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise FlavorConfigError(f"Invalid YAML in {path}: {e}") from e
    return config_from_dict(data, path)


def write_default_config(path: pathlib.Path) -> pathlib.Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(dict(DEFAULTS), sort_keys=False, allow_unicode=True), encoding="utf-8")
    return path
