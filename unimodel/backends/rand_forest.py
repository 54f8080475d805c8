# unimodel/backends/rand_forest.py
"""
rand_forest backends

Three engines, one canonical vocabulary (mtry / trees / min_n):
- ranger:        num.trees / mtry / min.node.size, accepts seed
- randomForest:  ntree / mtry / nodesize, has no seed slot
- sklearn:       scikit-learn keyword names

All engines are fitted with scikit-learn random forests; the native names
only differ in how they are spelled and which extras are accepted.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping

from sklearn.ensemble import RandomForestClassifier, RandomForestRegressor

from unimodel.backends.common import (
    clamp_to_columns,
    clamp_to_rows,
    rename,
    split_call_args,
)
from unimodel.core.types import Mode
from unimodel.registry.descriptor import BackendDescriptor, ModelTypeDefinition

MODEL_TYPE = "rand_forest"

DEFINITION = ModelTypeDefinition(
    name=MODEL_TYPE,
    canonical_args=("mtry", "trees", "min_n"),
)

_MODES = frozenset({Mode.REGRESSION, Mode.CLASSIFICATION})


def _forest(mode: Mode, params: Dict[str, Any]):
    if mode is Mode.CLASSIFICATION:
        return RandomForestClassifier(**params)
    return RandomForestRegressor(**params)


# ------------------------------------------------------------------
# ranger
# ------------------------------------------------------------------
_RANGER_KWARGS = {
    "num.trees": "n_estimators",
    "mtry": "max_features",
    "min.node.size": "min_samples_leaf",
    "seed": "random_state",
    "num.threads": "n_jobs",
    "max.depth": "max_depth",
    "replace": "bootstrap",
    "sample.fraction": "max_samples",
}


def fit_ranger(call_args: Mapping[str, Any], *, mode: Mode):
    x, y, native = split_call_args(call_args)

    if "mtry" in native:
        native["mtry"] = clamp_to_columns("ranger", "mtry", native["mtry"], x)
    if "min.node.size" in native:
        native["min.node.size"] = clamp_to_rows(
            "ranger", "min.node.size", native["min.node.size"], x
        )
    # ranger: max.depth 0 means unlimited
    if native.get("max.depth") == 0:
        native["max.depth"] = None

    model = _forest(mode, rename(native, _RANGER_KWARGS))
    return model.fit(x, y)


# ------------------------------------------------------------------
# randomForest
# ------------------------------------------------------------------
_RANDOM_FOREST_KWARGS = {
    "ntree": "n_estimators",
    "mtry": "max_features",
    "nodesize": "min_samples_leaf",
    "replace": "bootstrap",
    "maxnodes": "max_leaf_nodes",
    "sampsize": "max_samples",
}


def fit_random_forest(call_args: Mapping[str, Any], *, mode: Mode):
    x, y, native = split_call_args(call_args)

    if "mtry" in native:
        native["mtry"] = clamp_to_columns("randomForest", "mtry", native["mtry"], x)
    if "nodesize" in native:
        native["nodesize"] = clamp_to_rows(
            "randomForest", "nodesize", native["nodesize"], x
        )

    model = _forest(mode, rename(native, _RANDOM_FOREST_KWARGS))
    return model.fit(x, y)


# ------------------------------------------------------------------
# sklearn
# ------------------------------------------------------------------
def fit_sklearn(call_args: Mapping[str, Any], *, mode: Mode):
    x, y, native = split_call_args(call_args)

    if "max_features" in native and isinstance(native["max_features"], int):
        native["max_features"] = clamp_to_columns(
            "sklearn", "max_features", native["max_features"], x
        )

    return _forest(mode, native).fit(x, y)


DESCRIPTORS = [
    BackendDescriptor(
        engine_name="ranger",
        model_type=MODEL_TYPE,
        supported_modes=_MODES,
        arg_name_map={
            "mtry": "mtry",
            "trees": "num.trees",
            "min_n": "min.node.size",
        },
        valid_native_args=frozenset(
            {"seed", "num.threads", "max.depth", "replace", "sample.fraction"}
        ),
        fit_fn=fit_ranger,
    ),
    BackendDescriptor(
        engine_name="randomForest",
        model_type=MODEL_TYPE,
        supported_modes=_MODES,
        arg_name_map={
            "mtry": "mtry",
            "trees": "ntree",
            "min_n": "nodesize",
        },
        valid_native_args=frozenset({"replace", "maxnodes", "sampsize"}),
        fit_fn=fit_random_forest,
    ),
    BackendDescriptor(
        engine_name="sklearn",
        model_type=MODEL_TYPE,
        supported_modes=_MODES,
        arg_name_map={
            "mtry": "max_features",
            "trees": "n_estimators",
            "min_n": "min_samples_split",
        },
        valid_native_args=frozenset(
            {"random_state", "n_jobs", "max_depth", "criterion", "bootstrap"}
        ),
        fit_fn=fit_sklearn,
    ),
]
