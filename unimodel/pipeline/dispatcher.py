# unimodel/pipeline/dispatcher.py
from __future__ import annotations

from collections.abc import Mapping
from time import perf_counter
from typing import Any, Optional

from unimodel import logs
from unimodel.core.model_spec import ModelSpecification
from unimodel.pipeline.finalizer import finalize
from unimodel.registry.registry import BackendRegistry, resolve_registry
from unimodel.utils.errors import BackendExecutionError, InvalidInputData


def fit(
    spec: ModelSpecification,
    data: Mapping[str, Any],
    engine_name: str,
    *,
    registry: Optional[BackendRegistry] = None,
) -> Any:
    """
    Finalize ``spec`` against ``engine_name`` and run the backend fit.

    Contract:
    - finalize errors propagate unchanged
    - ``data`` slots (e.g. x / y) are passed through untouched and may not
      shadow a native argument
    - any backend failure -> BackendExecutionError (chained, never retried)
    - the returned handle is whatever the backend produced
    """
    registry = resolve_registry(registry)
    invocation = finalize(spec, engine_name, registry=registry)
    descriptor = registry.lookup(invocation.model_type, invocation.engine)

    if not isinstance(data, Mapping):
        raise InvalidInputData(
            f"fit data must be a mapping of input slots, got {type(data).__name__}"
        )

    shadowed = sorted(set(data) & set(invocation.native_args))
    if shadowed:
        raise InvalidInputData(
            f"fit data keys {shadowed} collide with native arguments of "
            f"engine '{engine_name}'"
        )

    call_args = {**invocation.native_args, **data}

    logs.info(
        f"[FitDispatcher] start {invocation.model_type}/{engine_name} "
        f"mode={invocation.mode.value}"
    )

    start = perf_counter()
    try:
        handle = descriptor.fit_fn(call_args, mode=invocation.mode)
    except Exception as exc:
        logs.exception(
            f"[FitDispatcher] {invocation.model_type}/{engine_name} backend failed"
        )
        raise BackendExecutionError(engine_name, str(exc)) from exc

    logs.info(
        f"[FitDispatcher] done {invocation.model_type}/{engine_name} "
        f"elapsed={perf_counter() - start:.4f}s"
    )
    return handle
