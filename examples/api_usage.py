#!/usr/bin/env python3
"""Example usage of the paramspace programmatic API.

The module-level ``space`` can also be used from the CLI:

    pspace describe examples/api_usage.py:space
    pspace sample examples/api_usage.py:space -n 5 -m lhs --seed 1 -f json
"""

from __future__ import annotations

from paramspace import (
    AnyOf,
    CategoricalSampler,
    Equals,
    HierarchicalSampler,
    ParameterSet,
    TruncatedNormalSampler,
    categorical_param,
    generate_design,
    generate_grid,
    integer_param,
    real_param,
)


def build_space() -> ParameterSet:
    """SVM search space with kernel-specific parameters on a log2 scale."""
    space = ParameterSet(
        [
            real_param("cost", -5.0, 5.0, doc="log2 of C"),
            categorical_param("kernel", ["linear", "rbf", "poly"]),
            real_param("gamma", -5.0, 5.0, doc="log2 of gamma"),
            integer_param("degree", 2, 5),
        ],
        trafo=lambda a, ps: {k: 2 ** v if k in ("cost", "gamma") else v for k, v in a.items()},
    )
    space.add_dependency("gamma", "kernel", AnyOf(("rbf", "poly")))
    space.add_dependency("degree", "kernel", Equals("poly"))
    return space


space = build_space()


def describe_samples(assignments, title: str, limit: int = 3) -> None:
    """Pretty-print a few assignments."""
    print(f"\n{title} (showing {min(limit, len(assignments))} of {len(assignments)})")
    for idx, params in enumerate(assignments[:limit], start=1):
        values = ", ".join(f"{k}={v:.4g}" if isinstance(v, float) else f"{k}={v}" for k, v in params.items())
        print(f"  {idx:>2}: {values}")


def main() -> None:
    print("paramspace API demo")
    print(space.to_frame().select(["id", "kind", "lower", "upper", "levels"]))

    # 1) Dependency-aware random sampling with per-parameter samplers
    sampler = HierarchicalSampler(space, [
        CategoricalSampler(space["kernel"], weights=[1, 2, 1]),
        TruncatedNormalSampler(space["cost"], mean=0.0, sd=2.0),
    ])
    describe_samples(sampler.sample(20, rng=123).transpose(), "Hierarchical samples")

    # 2) Latin hypercube design
    describe_samples(generate_design(space, 16, method="lhs", seed=7).transpose(), "LHS design")

    # 3) Grid, keeping only assignments that honour the dependencies
    grid = generate_grid(space, {"cost": 3, "gamma": 3, "degree": 2})
    legal = [a for a in grid.transpose(apply_trafo=False) if space.test(a)]
    print(f"\nGrid: {len(grid)} points, {len(legal)} satisfy all dependencies")

    # 4) Validation
    print(space.check({"cost": 1.0, "kernel": "linear", "degree": 3}))


if __name__ == "__main__":
    main()
