"""Shared fixtures for paramspace tests."""

import pytest

from paramspace.parameters import (
    AnyOf,
    Equals,
    ParameterSet,
    boolean_param,
    categorical_param,
    integer_param,
    real_param,
)


@pytest.fixture
def gated_set():
    """A (boolean), D in {x,y,z} requires A == False, B in [0,10] requires D in {x,y}."""
    ps = ParameterSet([
        boolean_param("A"),
        categorical_param("D", ["x", "y", "z"]),
        integer_param("B", 0, 10),
    ])
    ps.add_dependency("D", "A", Equals(False))
    ps.add_dependency("B", "D", AnyOf(("x", "y")))
    return ps


@pytest.fixture
def svm_set():
    """Typical SVM search space: kernel choice with kernel-specific parameters."""
    ps = ParameterSet([
        real_param("cost", -5.0, 5.0, doc="log2 of C"),
        categorical_param("kernel", ["linear", "rbf", "poly"]),
        real_param("gamma", -5.0, 5.0),
        integer_param("degree", 2, 5),
    ])
    ps.add_dependency("gamma", "kernel", AnyOf(("rbf", "poly")))
    ps.add_dependency("degree", "kernel", Equals("poly"))
    return ps


@pytest.fixture
def flat_set():
    """Independent boolean, real and integer parameters."""
    return ParameterSet([
        boolean_param("flag"),
        real_param("rate", 0.0, 1.0),
        integer_param("count", 1, 3),
    ])
