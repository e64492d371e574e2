# flavorsel/pipeline.py
"""
Ordered build steps.

The selection step is registered first and the consumption step after it, so
the google-services.json a consumer reads is always the one the selection
just wrote. `flavorsel-task <taskName>` is the hook form: call it from the
build before a task runs and it selects only for Google Services tasks.
"""
from __future__ import annotations

import argparse
import pathlib
import sys
from dataclasses import dataclass
from typing import Callable

from .flavors import FlavorConfig, FlavorConfigError, load_config
from .select_flavor import (EXIT_CONFIG, EXIT_MISSING_SOURCE, MissingSourceError, SelectionResult,
                            add_common_args, select_google_services)
from .variant import parse_consumer_task

SELECT_STEP = "select-google-services"


@dataclass(frozen=True)
class Step:
    name: str
    action: Callable[[dict], object]


class Pipeline:
    def __init__(self, steps: list[Step] | None = None):
        self._steps: list[Step] = []
        for s in steps or []:
            self.add(s.name, s.action)

    def add(self, name: str, action: Callable[[dict], object]) -> "Pipeline":
        if any(s.name == name for s in self._steps):
            raise ValueError(f"Duplicate step name: {name}")
        self._steps.append(Step(name, action))
        return self

    @property
    def names(self) -> list[str]:
        return [s.name for s in self._steps]

    def run(self, context: dict | None = None) -> dict:
        """Run steps in order; each result is stored in the context under the step name."""
        context = {} if context is None else context
        for step in self._steps:
            context[step.name] = step.action(context)
        return context


def selection_pipeline(directory: pathlib.Path, flavor: str, build_type: str, cfg: FlavorConfig,
                       consume: Callable[[dict], object] | None = None, consume_name: str = "consume",
                       strict: bool | None = None) -> Pipeline:
    p = Pipeline()
    p.add(SELECT_STEP, lambda ctx: select_google_services(directory, flavor, build_type, cfg, strict=strict))
    if consume is not None:
        p.add(consume_name, consume)
    return p


def run_for_task(task_name: str, directory: pathlib.Path, cfg: FlavorConfig,
                 strict: bool | None = None) -> SelectionResult | None:
    variant = parse_consumer_task(task_name, cfg)
    if variant is None:
        return None
    flavor, build_type = variant
    ctx = selection_pipeline(directory, flavor, build_type, cfg, strict=strict).run()
    return ctx[SELECT_STEP]


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        description="Select google-services.json before a process<Variant>GoogleServices task")
    ap.add_argument("tasks", nargs="+", help="Task names about to run (others are ignored)")
    add_common_args(ap)
    args = ap.parse_args(argv)

    directory = pathlib.Path(args.dir).resolve()
    try:
        cfg = load_config(directory, args.flavors_yml)
    except (FileNotFoundError, FlavorConfigError) as e:
        print(str(e), file=sys.stderr)
        return EXIT_CONFIG

    for task in args.tasks:
        try:
            run_for_task(task, directory, cfg, strict=args.strict)
        except MissingSourceError as e:
            print(f"{task}: {e}", file=sys.stderr)
            return EXIT_MISSING_SOURCE
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
