# tests/conftest.py
from __future__ import annotations

from typing import Any, Dict, List

import numpy as np
import pandas as pd
import pytest
from loguru import logger

from unimodel import BackendDescriptor, BackendRegistry, Mode, ModelTypeDefinition
from unimodel.backends import register_builtin_backends


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)
    yield
    logger.remove()


@pytest.fixture
def registry() -> BackendRegistry:
    """Fresh, frozen registry with the built-in backends."""
    return register_builtin_backends(BackendRegistry()).freeze()


@pytest.fixture
def regression_data() -> Dict[str, Any]:
    rng = np.random.default_rng(7)
    x = pd.DataFrame(rng.normal(size=(80, 4)), columns=["a", "b", "c", "d"])
    y = 2.0 * x["a"] - x["b"] + rng.normal(scale=0.05, size=80)
    return {"x": x, "y": y}


@pytest.fixture
def classification_data() -> Dict[str, Any]:
    rng = np.random.default_rng(11)
    x = pd.DataFrame(rng.normal(size=(80, 4)), columns=["a", "b", "c", "d"])
    y = (x["a"] + 0.5 * x["c"] + rng.normal(scale=0.5, size=80) > 0).astype(int)
    return {"x": x, "y": y}


# ============================================================
# Recording backend (no real fitting)
# ============================================================
class RecordingBackend:
    """
    fit_fn double: records every call and returns a fresh handle.
    """

    def __init__(self, fail_with: Exception | None = None):
        self.calls: List[Dict[str, Any]] = []
        self.fail_with = fail_with

    def __call__(self, call_args, *, mode):
        self.calls.append({"args": dict(call_args), "mode": mode})
        if self.fail_with is not None:
            raise self.fail_with
        return {"handle": len(self.calls), "args": dict(call_args)}


@pytest.fixture
def recording_backend() -> RecordingBackend:
    return RecordingBackend()


@pytest.fixture
def failing_backend() -> RecordingBackend:
    return RecordingBackend(fail_with=RuntimeError("singular matrix"))


@pytest.fixture
def make_toy_registry():
    """
    Factory fixture: registry with one model type "toy" (args alpha / beta)
    and two engines backed by ``backend``.

    - "one": alpha -> a, beta -> b, accepts seed, regression only
    - "two": alpha -> A, no beta, no seed, regression + classification
    """

    def _make(backend) -> BackendRegistry:
        reg = BackendRegistry()
        reg.register_model_type(
            ModelTypeDefinition(name="toy", canonical_args=("alpha", "beta"))
        )
        reg.register(
            BackendDescriptor(
                engine_name="one",
                model_type="toy",
                supported_modes=frozenset({Mode.REGRESSION}),
                arg_name_map={"alpha": "a", "beta": "b"},
                valid_native_args=frozenset({"seed"}),
                fit_fn=backend,
            )
        )
        reg.register(
            BackendDescriptor(
                engine_name="two",
                model_type="toy",
                supported_modes=frozenset({Mode.REGRESSION, Mode.CLASSIFICATION}),
                arg_name_map={"alpha": "A"},
                fit_fn=backend,
            )
        )
        return reg.freeze()

    return _make
