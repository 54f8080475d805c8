# unimodel/backends/linear_reg.py
from __future__ import annotations

from typing import Any, Mapping

from sklearn.linear_model import ElasticNet, LinearRegression
from sklearn.pipeline import make_pipeline
from sklearn.preprocessing import StandardScaler

from unimodel.backends.common import rename, split_call_args
from unimodel.core.types import Mode
from unimodel.registry.descriptor import BackendDescriptor, ModelTypeDefinition

MODEL_TYPE = "linear_reg"

DEFINITION = ModelTypeDefinition(
    name=MODEL_TYPE,
    canonical_args=("penalty", "mixture"),
    default_mode=Mode.REGRESSION,
)

_GLMNET_KWARGS = {
    "lambda": "alpha",
    "alpha": "l1_ratio",
    "maxit": "max_iter",
    "thresh": "tol",
}


def fit_lm(call_args: Mapping[str, Any], *, mode: Mode):
    x, y, native = split_call_args(call_args)
    return LinearRegression(**native).fit(x, y)


def fit_glmnet(call_args: Mapping[str, Any], *, mode: Mode):
    """
    Elastic net with glmnet's conventions: lasso unless ``alpha`` (mixture)
    says otherwise, predictors standardized unless ``standardize=False``.
    """
    x, y, native = split_call_args(call_args)

    standardize = native.pop("standardize", True)
    params = rename(native, _GLMNET_KWARGS)
    params.setdefault("l1_ratio", 1.0)

    model = ElasticNet(**params)
    if standardize:
        model = make_pipeline(StandardScaler(), model)
    return model.fit(x, y)


DESCRIPTORS = [
    BackendDescriptor(
        engine_name="lm",
        model_type=MODEL_TYPE,
        supported_modes=frozenset({Mode.REGRESSION}),
        arg_name_map={},
        valid_native_args=frozenset({"fit_intercept", "positive"}),
        fit_fn=fit_lm,
    ),
    BackendDescriptor(
        engine_name="glmnet",
        model_type=MODEL_TYPE,
        supported_modes=frozenset({Mode.REGRESSION}),
        arg_name_map={"penalty": "lambda", "mixture": "alpha"},
        valid_native_args=frozenset({"standardize", "maxit", "thresh"}),
        required_args=frozenset({"penalty"}),
        fit_fn=fit_glmnet,
    ),
]
