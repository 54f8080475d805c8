# unimodel/backends/common.py
from __future__ import annotations

from typing import Any, Dict, Mapping, Tuple

import numpy as np

from unimodel import logs

# input slots every built-in fit_fn consumes
DATA_SLOTS = ("x", "y")


def split_call_args(call_args: Mapping[str, Any]) -> Tuple[Any, Any, Dict[str, Any]]:
    """
    Separate the pass-through data slots from native arguments.
    """
    missing = [slot for slot in DATA_SLOTS if slot not in call_args]
    if missing:
        raise KeyError(f"fit data is missing input slots: {missing}")

    params = {k: v for k, v in call_args.items() if k not in DATA_SLOTS}
    return call_args["x"], call_args["y"], params


def rename(params: Mapping[str, Any], table: Mapping[str, str]) -> Dict[str, Any]:
    """
    Map native names onto estimator keyword names; unmapped names are kept.
    """
    return {table.get(k, k): v for k, v in params.items()}


def clamp_to_columns(engine: str, name: str, value: int, x: Any) -> int:
    """
    Cap a per-split predictor count at the number of columns in ``x``.
    """
    n_cols = int(np.shape(x)[1])
    if value > n_cols:
        logs.warning(
            f"[{engine}] {name}={value} exceeds {n_cols} predictors; "
            f"using {n_cols}"
        )
        return n_cols
    return value


def clamp_to_rows(engine: str, name: str, value: int, x: Any) -> int:
    n_rows = int(np.shape(x)[0])
    if value > n_rows:
        logs.warning(
            f"[{engine}] {name}={value} exceeds {n_rows} rows; using {n_rows}"
        )
        return n_rows
    return value
