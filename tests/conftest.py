# tests/conftest.py
import pytest
from symunits.core.expression import Literal, Symbol



@pytest.fixture
def x():
    return Symbol("x")

@pytest.fixture
def y():
    return Symbol("y")

@pytest.fixture
def one():
    return Literal(1)

@pytest.fixture
def zero():
    return Literal(0)
