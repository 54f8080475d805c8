# unimodel/backends/boost_tree.py
from __future__ import annotations

from typing import Any, Mapping

from sklearn.ensemble import GradientBoostingClassifier, GradientBoostingRegressor

from unimodel.backends.common import clamp_to_rows, split_call_args
from unimodel.core.types import Mode
from unimodel.registry.descriptor import BackendDescriptor, ModelTypeDefinition

MODEL_TYPE = "boost_tree"

DEFINITION = ModelTypeDefinition(
    name=MODEL_TYPE,
    canonical_args=("trees", "tree_depth", "learn_rate", "min_n", "sample_size"),
)


def fit_sklearn(call_args: Mapping[str, Any], *, mode: Mode):
    x, y, native = split_call_args(call_args)

    if isinstance(native.get("min_samples_split"), int):
        native["min_samples_split"] = clamp_to_rows(
            "sklearn", "min_samples_split", native["min_samples_split"], x
        )

    if mode is Mode.CLASSIFICATION:
        model = GradientBoostingClassifier(**native)
    else:
        model = GradientBoostingRegressor(**native)
    return model.fit(x, y)


DESCRIPTORS = [
    BackendDescriptor(
        engine_name="sklearn",
        model_type=MODEL_TYPE,
        supported_modes=frozenset({Mode.REGRESSION, Mode.CLASSIFICATION}),
        arg_name_map={
            "trees": "n_estimators",
            "tree_depth": "max_depth",
            "learn_rate": "learning_rate",
            "min_n": "min_samples_split",
            "sample_size": "subsample",
        },
        valid_native_args=frozenset(
            {"random_state", "n_iter_no_change", "validation_fraction"}
        ),
        fit_fn=fit_sklearn,
    ),
]
