# unimodel/core/resolution.py
from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, List, Literal, Optional

from unimodel.core.model_spec import ModelSpecification
from unimodel.core.types import Placeholder
from unimodel.utils.errors import HasVaryingParameters


@dataclass(frozen=True)
class VaryingArg:
    """One row of the varying-argument report."""

    name: str
    varying: bool
    source: Literal["model_spec", "engine_args"]
    label: Optional[str] = None


def varying_args(spec: ModelSpecification) -> List[VaryingArg]:
    """
    Report every argument of ``spec`` (canonical first, then engine args)
    and whether it is still a Placeholder.
    """
    rows = [
        VaryingArg(
            name=name,
            varying=isinstance(value, Placeholder),
            source="model_spec",
            label=value.label if isinstance(value, Placeholder) else None,
        )
        for name, value in spec.args.items()
    ]
    rows.extend(
        VaryingArg(
            name=name,
            varying=isinstance(value, Placeholder),
            source="engine_args",
            label=value.label if isinstance(value, Placeholder) else None,
        )
        for name, value in spec.engine_args.items()
    )
    return rows


def unresolved_fields(spec: ModelSpecification) -> FrozenSet[str]:
    return frozenset(row.name for row in varying_args(spec) if row.varying)


def is_resolved(spec: ModelSpecification) -> bool:
    return not unresolved_fields(spec)


def ensure_resolved(spec: ModelSpecification) -> None:
    """Gate shared by finalize and fit."""
    unresolved = unresolved_fields(spec)
    if unresolved:
        raise HasVaryingParameters(unresolved)
