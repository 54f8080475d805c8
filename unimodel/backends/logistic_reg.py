# unimodel/backends/logistic_reg.py
from __future__ import annotations

from typing import Any, Mapping

import numpy as np
from sklearn.linear_model import LogisticRegression
from sklearn.pipeline import make_pipeline
from sklearn.preprocessing import StandardScaler

from unimodel.backends.common import split_call_args
from unimodel.core.types import Mode
from unimodel.registry.descriptor import BackendDescriptor, ModelTypeDefinition

MODEL_TYPE = "logistic_reg"

DEFINITION = ModelTypeDefinition(
    name=MODEL_TYPE,
    canonical_args=("penalty", "mixture"),
    default_mode=Mode.CLASSIFICATION,
)


def fit_glm(call_args: Mapping[str, Any], *, mode: Mode):
    x, y, native = split_call_args(call_args)

    # unpenalized fit: C -> inf
    model = LogisticRegression(
        C=np.inf,
        max_iter=native.get("maxit", 100),
        fit_intercept=native.get("fit_intercept", True),
    )
    return model.fit(x, y)


def fit_glmnet(call_args: Mapping[str, Any], *, mode: Mode):
    x, y, native = split_call_args(call_args)

    penalty = float(native["lambda"])
    if penalty <= 0:
        raise ValueError(f"glmnet penalty must be positive, got {penalty}")

    model = LogisticRegression(
        penalty="elasticnet",
        solver="saga",
        C=1.0 / penalty,
        l1_ratio=native.get("alpha", 1.0),
        max_iter=native.get("maxit", 1000),
        tol=native.get("thresh", 1e-4),
    )
    if native.get("standardize", True):
        model = make_pipeline(StandardScaler(), model)
    return model.fit(x, y)


DESCRIPTORS = [
    BackendDescriptor(
        engine_name="glm",
        model_type=MODEL_TYPE,
        supported_modes=frozenset({Mode.CLASSIFICATION}),
        arg_name_map={},
        valid_native_args=frozenset({"maxit", "fit_intercept"}),
        fit_fn=fit_glm,
    ),
    BackendDescriptor(
        engine_name="glmnet",
        model_type=MODEL_TYPE,
        supported_modes=frozenset({Mode.CLASSIFICATION}),
        arg_name_map={"penalty": "lambda", "mixture": "alpha"},
        valid_native_args=frozenset({"standardize", "maxit", "thresh"}),
        required_args=frozenset({"penalty"}),
        fit_fn=fit_glmnet,
    ),
]
