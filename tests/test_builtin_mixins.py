from types import SimpleNamespace

import pytest

from classy import Mixin, MixinCollisionError, MustBeError, MustNotBeEmptyError
from classy.builtin_mixins import BUILTIN_MIXINS, HasMixin, IsAMixin


@pytest.fixture
def chain(ctx):
    ctx.mixins.register_multiple_mixins({
        "Wheels": Mixin("Wheels", lambda t: None),
        "Cargo": Mixin("Cargo", lambda t: None),
        "Unused": Mixin("Unused", lambda t: None),
    })
    vehicle = ctx.new_class({"class_name": "Vehicle"}, mixins=["Wheels"])
    car = ctx.new_subclass({"class_name": "Car"}, vehicle)
    truck = ctx.new_subclass({"class_name": "Truck"}, "Car", mixins=["Cargo"])
    ctx.new_class({"class_name": "Boat"})
    return vehicle, car, truck


def test_root_classes_get_both_builtins(ctx, chain):
    vehicle, car, truck = chain
    assert {"IsAMixin", "HasMixin"} <= vehicle.mixins
    assert "IsAMixin" not in car.mixins
    assert "IsAMixin" not in truck.mixins


def test_is_a_walks_the_chain(chain):
    vehicle, car, truck = chain
    obj = truck.new()

    assert obj.is_a("Truck") and obj.is_a("Car") and obj.is_a("Vehicle")
    assert not obj.is_a("Boat")
    assert car.is_a("Vehicle")
    assert not car.is_a("Truck")
    assert not vehicle.new().is_a("Car")


def test_is_a_requires_string(chain):
    _, _, truck = chain
    with pytest.raises(MustBeError, match="'class_name' must be a string"):
        truck.new().is_a(truck)


def test_has_mixin_sees_ancestor_mixins(chain):
    vehicle, car, truck = chain
    obj = truck.new()

    assert obj.has_mixin("Wheels")
    assert obj.has_mixin("Cargo")
    assert obj.has_mixin("IsAMixin")
    assert not obj.has_mixin("Unused")
    assert car.has_mixin("Wheels")
    assert not car.has_mixin("Cargo")
    assert not vehicle.new().has_mixin("Cargo")


def test_has_any_and_all_mixins(chain):
    _, car, truck = chain
    obj = truck.new()

    assert obj.has_any_mixins(["Unused", "Cargo", "Wheels"]) == (True, ["Cargo", "Wheels"])
    assert car.has_any_mixins(["Unused", "Cargo"]) == (False, [])
    assert obj.has_all_mixins(["Cargo", "Wheels", "HasMixin"])
    assert not obj.has_all_mixins(["Cargo", "Unused"])
    assert car.has_all_mixins({"Wheels"})


def test_has_any_and_all_reject_empty_or_non_collections(chain):
    _, _, truck = chain
    with pytest.raises(MustNotBeEmptyError):
        truck.has_any_mixins([])
    with pytest.raises(MustNotBeEmptyError):
        truck.has_all_mixins(())
    with pytest.raises(MustBeError):
        truck.has_all_mixins("Cargo")


def test_builtins_can_be_added_to_a_subclass_again(ctx, chain):
    _, _, truck = chain

    ctx.mixins.add_mixin(truck, "IsAMixin")

    assert "IsAMixin" in truck.mixins
    assert truck.new().is_a("Vehicle")


def test_builtins_reject_existing_members(ctx):
    cls = ctx.classes.create_class({"class_name": "Custom", "has_any_mixins": "mine"})

    with pytest.raises(MixinCollisionError, match="'has_any_mixins'"):
        ctx.mixins.add_mixin(cls, "HasMixin")
    # nothing partially installed
    assert not hasattr(cls, "has_mixin")


def test_builtins_on_plain_objects():
    leaf = SimpleNamespace(class_name="Leaf", superclass=SimpleNamespace(class_name="Branch", mixins={"Sap"}))

    IsAMixin.apply(leaf)
    HasMixin.apply(leaf)

    assert leaf.is_a("Leaf") and leaf.is_a("Branch") and not leaf.is_a("Root")
    assert leaf.has_mixin("Sap")
    assert not leaf.has_mixin("Bark")


def test_builtins_require_class_name_on_plain_objects():
    with pytest.raises(MustBeError, match="'class_name' must be a string"):
        IsAMixin.apply(SimpleNamespace())
    with pytest.raises(MustBeError):
        HasMixin.apply(SimpleNamespace(class_name=3))


def test_builtin_table_names():
    assert sorted(BUILTIN_MIXINS) == ["HasMixin", "IsAMixin"]
    assert BUILTIN_MIXINS["IsAMixin"].apply is IsAMixin.apply
