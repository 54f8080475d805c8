# unimodel/pipeline/parallel.py
from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Iterable, Mapping, Optional

from unimodel import logs
from unimodel.core.model_spec import ModelSpecification
from unimodel.pipeline.dispatcher import fit
from unimodel.registry.registry import BackendRegistry, resolve_registry


def fit_many(
    specs: Iterable[ModelSpecification],
    data: Mapping[str, Any],
    engine_name: str,
    *,
    max_workers: Optional[int] = None,
    registry: Optional[BackendRegistry] = None,
) -> list[Any]:
    """
    Fit several independent specifications on worker threads.

    - handles come back in input order
    - the first failure propagates (remaining fits are not cancelled)
    - no state is shared between fits apart from the read-only registry
    """
    specs = list(specs)
    if not specs:
        logs.info("[FitMany] no specifications to fit")
        return []

    # resolve once so workers never race on the lazy default
    registry = resolve_registry(registry)
    workers = _resolve_workers(len(specs), max_workers)

    logs.info(f"[FitMany] start total={len(specs)} workers={workers}")

    if workers == 1:
        return [fit(spec, data, engine_name, registry=registry) for spec in specs]

    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(
            pool.map(
                lambda spec: fit(spec, data, engine_name, registry=registry),
                specs,
            )
        )


def _resolve_workers(total: int, max_workers: Optional[int]) -> int:
    cpu = os.cpu_count() or 1
    if max_workers is None:
        return min(cpu, total)
    return max(1, min(max_workers, total))
