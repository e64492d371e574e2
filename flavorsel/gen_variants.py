# flavorsel/gen_variants.py
from __future__ import annotations

import argparse
import json
import pathlib
import sys

from .flavors import DESCRIPTOR_NAME, FlavorConfig, FlavorConfigError, find_flavors_yml, load_config, write_default_config
from .select_flavor import EXIT_CONFIG
from .variant import consumer_task_name, iter_variants, variant_name


def variants_matrix(directory: pathlib.Path, cfg: FlavorConfig) -> dict:
    out = {}
    for flavor, build_type in iter_variants(cfg):
        src = directory / cfg.source_name(flavor)
        out[variant_name(flavor, build_type)] = {
            "flavor": flavor,
            "buildType": build_type,
            "dimension": cfg.dimension,
            "source": src.name,
            "sourceExists": src.is_file(),
            "target": cfg.target,
            "consumerTask": consumer_task_name(cfg, flavor, build_type),
        }
    return out


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Write a JSON description of every build variant")
    ap.add_argument("--dir", default=".", help="Directory holding the google-services files")
    ap.add_argument("--flavors-yml", help="Flavor descriptor (default: <dir>/flavors.yml, then its parent)")
    ap.add_argument("--out", default="variants.json", help="JSON file to write, relative to --dir")
    args = ap.parse_args(argv)

    directory = pathlib.Path(args.dir).resolve()
    try:
        if not args.flavors_yml and find_flavors_yml(directory) is None:
            created = write_default_config(directory / DESCRIPTOR_NAME)
            print(f"Created default flavor descriptor at {created}")
        cfg = load_config(directory, args.flavors_yml)
    except (FileNotFoundError, FlavorConfigError) as e:
        print(str(e), file=sys.stderr)
        return EXIT_CONFIG

    out_path = (directory / args.out).resolve()
    out_path.write_text(json.dumps(variants_matrix(directory, cfg), indent=2, ensure_ascii=False) + "\n",
                        encoding="utf-8")
    print(str(out_path))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
