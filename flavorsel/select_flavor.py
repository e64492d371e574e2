# flavorsel/select_flavor.py
"""
Copy google-services-<flavor>.json over google-services.json.

Run it before the Google Services processing step of an Android build
(processDevReleaseGoogleServices and friends). A missing flavor file is a
silent no-op unless strict mode is on, in which case the target is left
untouched and the script exits with code 4.
"""
from __future__ import annotations

import argparse
import os
import pathlib
import shutil
import sys
from dataclasses import dataclass

from .flavors import FlavorConfig, FlavorConfigError, load_config
from .variant import variant_name

ENV_FLAVOR = "FLAVORSEL_FLAVOR"
ENV_BUILD_TYPE = "FLAVORSEL_BUILD_TYPE"

EXIT_CONFIG = 2
EXIT_USAGE = 3
EXIT_MISSING_SOURCE = 4


class MissingSourceError(FileNotFoundError):
    pass


@dataclass(frozen=True)
class SelectionResult:
    variant: str
    source: pathlib.Path
    target: pathlib.Path
    copied: bool


def resolve_flavor(cfg: FlavorConfig, flavor: str | None = None, build_type: str | None = None) -> tuple[str, str]:
    """Argument first, then environment, then the descriptor defaults."""
    flavor = flavor or os.environ.get(ENV_FLAVOR) or cfg.default_flavor
    build_type = build_type or os.environ.get(ENV_BUILD_TYPE) or cfg.default_build_type
    return cfg.check_flavor(flavor), cfg.check_build_type(build_type)


def select_google_services(directory: pathlib.Path, flavor: str, build_type: str,
                           cfg: FlavorConfig | None = None, strict: bool | None = None) -> SelectionResult:
    cfg = cfg or FlavorConfig()
    cfg.check_flavor(flavor)
    cfg.check_build_type(build_type)
    strict = cfg.strict if strict is None else strict

    variant = variant_name(flavor, build_type)
    src = directory / cfg.source_name(flavor)
    dst = directory / cfg.target

    if not src.is_file():
        if strict:
            raise MissingSourceError(f"No {src.name} for {variant} in {directory}")
        return SelectionResult(variant, src, dst, copied=False)

    shutil.copyfile(src, dst)
    print(f"Copied {cfg.target} for {variant}")
    return SelectionResult(variant, src, dst, copied=True)


def add_common_args(ap: argparse.ArgumentParser) -> None:
    ap.add_argument("--dir", default=".",
                    help="Directory holding the google-services files (default: current directory)")
    ap.add_argument("--flavors-yml", help="Flavor descriptor (default: <dir>/flavors.yml, then its parent)")
    ap.add_argument("--strict", action="store_true", default=None,
                    help="Fail when the flavor file is missing instead of skipping")


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Copy google-services-<flavor>.json to google-services.json")
    ap.add_argument("--flavor", help=f"Flavor to select (default: ${ENV_FLAVOR} or the descriptor default)")
    ap.add_argument("--build-type", help=f"Build type (default: ${ENV_BUILD_TYPE} or the descriptor default)")
    add_common_args(ap)
    args = ap.parse_args(argv)

    directory = pathlib.Path(args.dir).resolve()
    try:
        cfg = load_config(directory, args.flavors_yml)
    except (FileNotFoundError, FlavorConfigError) as e:
        print(str(e), file=sys.stderr)
        return EXIT_CONFIG

    try:
        flavor, build_type = resolve_flavor(cfg, args.flavor, args.build_type)
    except FlavorConfigError as e:
        print(str(e), file=sys.stderr)
        return EXIT_USAGE

    try:
        select_google_services(directory, flavor, build_type, cfg, strict=args.strict)
    except MissingSourceError as e:
        print(str(e), file=sys.stderr)
        return EXIT_MISSING_SOURCE
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
