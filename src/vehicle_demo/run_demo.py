"""Car/Truck walkthrough of classy, one fresh context per scenario.

    python -m vehicle_demo.run_demo              # every scenario
    python -m vehicle_demo.run_demo boost-mixin  # just one
    python -m vehicle_demo.run_demo --trace      # show classy trace lines
"""
from __future__ import annotations

import argparse
import contextlib
import io
import sys
from dataclasses import dataclass, field
from types import SimpleNamespace
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from classy import Classy, RestrictedFieldError, configure
from vehicle_demo.vehicles import define_vehicles


@dataclass
class Report:
    """Outcome of one scenario: lifecycle events, captured log lines, mismatches."""

    key: str
    title: str
    events: List[str] = field(default_factory=list)
    log_lines: List[str] = field(default_factory=list)
    failures: List[str] = field(default_factory=list)
    checks: int = 0

    @property
    def ok(self) -> bool:
        return not self.failures

    def expect(self, label: str, actual: object, expected: object) -> None:
        self.checks += 1
        if actual != expected:
            self.failures.append(f"{label}: expected {expected!r}, got {actual!r}")


ScenarioFn = Callable[[Classy, Report], None]

SCENARIOS: Dict[str, Tuple[str, ScenarioFn]] = {}


def scenario(key: str, title: str):
    def register(fn: ScenarioFn) -> ScenarioFn:
        SCENARIOS[key] = (title, fn)
        return fn
    return register


@scenario("car-basics", "Create a Car and call its methods")
def car_basics(ctx: Classy, report: Report) -> None:
    car = ctx.new_object_of_class("Car", 120, "green")
    report.expect("max_speed", car.max_speed, 120)
    report.expect("color", car.color, "green")
    report.expect("honk()", car.honk(), "Car BEEP")
    report.expect("class field via object", car.wheels, 4)


@scenario("subclass-init", "Truck runs only its own init, chaining explicitly")
def subclass_init(ctx: Classy, report: Report) -> None:
    truck = ctx.get_class("Truck").new(90, "blue", 18)
    report.expect("honk() inherited", truck.honk(), "Truck BEEP")
    report.expect("tire_amount", truck.tire_amount, 18)
    report.expect("is_a('Car')", truck.is_a("Car"), True)
    report.expect("is_a('Boat')", truck.is_a("Boat"), False)
    report.expect("init order", report.events, ["car init", "truck init"])


@scenario("destroy-chain", "destroy runs every terminate once, derived first")
def destroy_chain(ctx: Classy, report: Report) -> None:
    truck = ctx.new_object_of_class("Truck")
    report.events.clear()
    truck.destroy()
    truck.destroy()
    report.expect("terminate order", report.events, ["truck terminate", "car terminate"])
    report.expect("is_destroyed", truck.is_destroyed, True)


@scenario("boost-mixin", "Mixin added to Car reaches objects and subclasses")
def boost_mixin(ctx: Classy, report: Report) -> None:
    car = ctx.new_object_of_class("Car", 160)
    ctx.mixins.add_mixin("Car", "VehicleBoostMixin")
    truck = ctx.new_object_of_class("Truck", 50)
    report.expect("boost() on existing object", car.boost(), 320)
    report.expect("boost() inherited by Truck", truck.boost(), 100)
    report.expect("Truck has_mixin", truck.has_mixin("VehicleBoostMixin"), True)


@scenario("plain-mixin", "Mixins apply to plain objects too")
def plain_mixin(ctx: Classy, report: Report) -> None:
    scooter = SimpleNamespace(max_speed=20)
    ctx.mixins.add_mixin(scooter, "VehicleBoostMixin")
    report.expect("boost() on a plain object", scooter.boost(), 40)


@scenario("restricted", "Sealed and set-once fields reject writes")
def restricted(ctx: Classy, report: Report) -> None:
    car = ctx.get_class("Car")
    for name, sealed in (("class_name", True), ("new", True), ("init", True), ("top_speed_unit", False)):
        try:
            setattr(car, name, "nope")
        except RestrictedFieldError:
            rejected = True
        else:
            rejected = False
        report.expect(f"set {name}", rejected, sealed)


def run_scenario(key: str) -> Report:
    """Run *key* against freshly defined vehicles, capturing classy's stderr log."""
    title, fn = SCENARIOS[key]
    report = Report(key, title)
    ctx = Classy()
    captured = io.StringIO()
    with contextlib.redirect_stderr(captured):
        define_vehicles(ctx, report.events)
        fn(ctx, report)
    report.log_lines = captured.getvalue().splitlines()
    return report


def print_report(report: Report, stream=None) -> None:
    stream = stream or sys.stdout
    status = "ok" if report.ok else "FAILED"
    print(f"{report.key:<14} {report.title} ... {status} ({report.checks} checks)", file=stream)
    for failure in report.failures:
        print(f"    ! {failure}", file=stream)
    for line in report.log_lines:
        print(f"    | {line}", file=stream)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Run the classy Car/Truck walkthrough.")
    parser.add_argument("keys", nargs="*", metavar="SCENARIO", help="scenarios to run (default: all)")
    parser.add_argument("--list", action="store_true", help="list scenarios and exit")
    parser.add_argument("--trace", action="store_true", help="show classy trace lines under each scenario")
    args = parser.parse_args(argv)

    if args.list:
        for key, (title, _) in SCENARIOS.items():
            print(f"{key:<14} {title}")
        return 0

    unknown = [key for key in args.keys if key not in SCENARIOS]
    if unknown:
        parser.error(f"unknown scenario(s): {', '.join(unknown)}")
    if args.trace:
        configure(log_level="DEBUG", trace=True)

    reports = [run_scenario(key) for key in dict.fromkeys(args.keys or SCENARIOS)]
    for report in reports:
        print_report(report)

    failed = [r.key for r in reports if not r.ok]
    total = sum(r.checks for r in reports)
    print(f"\n{len(reports)} scenario(s), {total} checks, {len(failed)} failed"
          + (f": {', '.join(failed)}" if failed else ""))
    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
