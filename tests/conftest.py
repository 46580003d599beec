import sys
import pathlib

import pytest

# Ensure src/ layout is on path for pytest invocation from repo folder
ROOT = pathlib.Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
TESTS = ROOT / "tests"
for p in (str(SRC), str(TESTS)):
    if p not in sys.path:
        sys.path.insert(0, p)

from classy import Classy, ClassRegistry, MixinRegistry


@pytest.fixture
def ctx():
    return Classy()


@pytest.fixture
def classes():
    return ClassRegistry()


@pytest.fixture
def mixins(classes):
    return MixinRegistry(classes)
