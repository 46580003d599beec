"""Car / Truck classes and a boost mixin used by the classy demo."""
from __future__ import annotations

from typing import Any, List

from classy import Classy, ensure_absent, install_member


class VehicleBoostMixin:
    """Adds ``boost()``, which doubles ``max_speed`` and returns the new value."""

    @staticmethod
    def apply(target: Any) -> None:
        ensure_absent(target, "boost")
        install_member(target, "boost", VehicleBoostMixin.boost)

    @staticmethod
    def boost(self) -> int:
        self.max_speed = self.max_speed * 2
        return self.max_speed


def define_vehicles(ctx: Classy, events: List[str]) -> None:
    """Register ``Car`` and its subclass ``Truck`` on *ctx*.

    Lifecycle hooks append to *events* so callers can observe ordering.
    """

    def car_init(self, max_speed: int = 32, color: str = "red") -> None:
        self.max_speed = max_speed
        self.color = color
        events.append("car init")

    def car_terminate(self) -> None:
        events.append("car terminate")

    def honk(self) -> str:
        return f"{self.class_name} BEEP"

    car = ctx.new_class({
        "class_name": "Car",
        "init": car_init,
        "terminate": car_terminate,
        "honk": honk,
        "wheels": 4,
    })

    truck = ctx.new_subclass({"class_name": "Truck"}, "Car")

    # init/terminate may be defined once after the class exists.
    def truck_init(self, max_speed: int = 32, color: str = "red", tire_amount: int = 6) -> None:
        car.init(self, max_speed, color)
        self.tire_amount = tire_amount
        events.append("truck init")

    def truck_terminate(self) -> None:
        events.append("truck terminate")

    truck.init = truck_init
    truck.terminate = truck_terminate

    ctx.mixins.register_mixin("VehicleBoostMixin", VehicleBoostMixin)
