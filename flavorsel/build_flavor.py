# flavorsel/build_flavor.py
from __future__ import annotations

import argparse
import pathlib
import subprocess
import sys

from .flavors import FlavorConfigError, load_config
from .pipeline import selection_pipeline
from .select_flavor import (EXIT_CONFIG, EXIT_MISSING_SOURCE, EXIT_USAGE, MissingSourceError,
                            add_common_args, resolve_flavor)

FLUTTER = 'flutter.bat' if sys.platform == 'win32' else 'flutter'
BUILD_TARGETS = ("apk", "appbundle")


def look_for_proj_dir(d: pathlib.Path, fn: str = 'pubspec.yaml') -> pathlib.Path | None:
    d = d.resolve()
    while not (d / fn).is_file():
        if d.parent == d:
            return None
        d = d.parent
    return d


def flutter_build_cmd(target: str, flavor: str, build_type: str) -> list[str]:
    return [FLUTTER, "build", target, "--flavor", flavor, f"--{build_type}"]


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Select google-services.json for a flavor, then run flutter build")
    ap.add_argument("--flavor", help="Flavor to build")
    bt = ap.add_mutually_exclusive_group()
    bt.add_argument("--build-type", help="Build type (debug, release, ...)")
    bt.add_argument("--release", action="store_true", help="Shortcut for --build-type release")
    ap.add_argument("--target", choices=BUILD_TARGETS, default="apk", help="flutter build target")
    ap.add_argument("--dry-run", action="store_true", help="Print the flutter command instead of running it")
    add_common_args(ap)
    args = ap.parse_args(argv)

    directory = pathlib.Path(args.dir).resolve()
    try:
        cfg = load_config(directory, args.flavors_yml)
    except (FileNotFoundError, FlavorConfigError) as e:
        print(str(e), file=sys.stderr)
        return EXIT_CONFIG

    try:
        flavor, build_type = resolve_flavor(cfg, args.flavor, "release" if args.release else args.build_type)
    except FlavorConfigError as e:
        print(str(e), file=sys.stderr)
        return EXIT_USAGE

    proj_dir = look_for_proj_dir(directory)
    if proj_dir is None:
        print(f"Cannot find a Flutter project (pubspec.yaml) above {directory}", file=sys.stderr)
        return EXIT_CONFIG

    cmd = flutter_build_cmd(args.target, flavor, build_type)

    def consume(ctx: dict) -> int:
        print('>>> ' + ' '.join(cmd))
        if args.dry_run:
            return 0
        try:
            return subprocess.run(cmd, cwd=proj_dir).returncode
        except FileNotFoundError:
            print(f"{FLUTTER} not found in PATH", file=sys.stderr)
            return 127

    pipeline = selection_pipeline(directory, flavor, build_type, cfg,
                                  consume=consume, consume_name="flutter-build", strict=args.strict)
    try:
        ctx = pipeline.run()
    except MissingSourceError as e:
        print(str(e), file=sys.stderr)
        return EXIT_MISSING_SOURCE
    return ctx["flutter-build"]


if __name__ == "__main__":
    raise SystemExit(main())
