#!filepath: tests/pipeline/test_parallel.py
import pytest
from sklearn.ensemble import RandomForestRegressor

from unimodel import (
    BackendExecutionError,
    HasVaryingParameters,
    create,
    fit_many,
    varying,
    with_arg,
    with_engine_args,
    with_mode,
)
from unimodel.pipeline.parallel import _resolve_workers


def _toy_specs(reg, alphas):
    base = with_mode(create("toy", registry=reg), "regression")
    return [with_arg(base, "alpha", a) for a in alphas]


def test_fit_many_keeps_input_order(make_toy_registry, recording_backend):
    reg = make_toy_registry(recording_backend)
    specs = _toy_specs(reg, range(12))

    handles = fit_many(specs, {"x": 0}, "one", max_workers=4, registry=reg)

    assert [h["args"]["a"] for h in handles] == list(range(12))
    assert len(recording_backend.calls) == 12


def test_fit_many_sequential(make_toy_registry, recording_backend):
    reg = make_toy_registry(recording_backend)

    handles = fit_many(_toy_specs(reg, [3, 1]), {}, "two", max_workers=1, registry=reg)

    assert [h["args"]["A"] for h in handles] == [3, 1]


def test_fit_many_empty(make_toy_registry, recording_backend):
    reg = make_toy_registry(recording_backend)
    assert fit_many([], {}, "one", registry=reg) == []


def test_fit_many_propagates_first_failure(make_toy_registry, failing_backend):
    reg = make_toy_registry(failing_backend)

    with pytest.raises(BackendExecutionError):
        fit_many(_toy_specs(reg, [1, 2, 3]), {}, "one", max_workers=2, registry=reg)


def test_fit_many_propagates_finalize_errors(make_toy_registry, recording_backend):
    reg = make_toy_registry(recording_backend)
    specs = _toy_specs(reg, [1, varying()])

    with pytest.raises(HasVaryingParameters):
        fit_many(specs, {}, "one", max_workers=2, registry=reg)


def test_fit_many_real_forests(registry, regression_data):
    base = create("rand_forest", mode="regression", registry=registry)
    base = with_engine_args(base, seed=1)
    specs = [with_arg(base, "trees", n) for n in (3, 6, 9)]

    models = fit_many(specs, regression_data, "ranger", max_workers=3, registry=registry)

    assert all(isinstance(m, RandomForestRegressor) for m in models)
    assert [m.n_estimators for m in models] == [3, 6, 9]


@pytest.mark.parametrize(
    "total, max_workers, expected",
    [
        (5, 1, 1),
        (5, 3, 3),
        (2, 8, 2),
        (4, 0, 1),
    ],
)
def test_resolve_workers(total, max_workers, expected):
    assert _resolve_workers(total, max_workers) == expected


def test_resolve_workers_defaults_to_cpu_count(monkeypatch):
    monkeypatch.setattr("unimodel.pipeline.parallel.os.cpu_count", lambda: 2)

    assert _resolve_workers(10, None) == 2
    assert _resolve_workers(1, None) == 1
