# unimodel/core/types.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union


class Mode(str, Enum):
    REGRESSION = "regression"
    CLASSIFICATION = "classification"
    CENSORED_REGRESSION = "censored regression"
    UNSUPERVISED = "unsupervised"
    UNSET = "unknown"


# ============================================================
# ArgumentValue = Concrete | Placeholder | UseDefault
# ============================================================
@dataclass(frozen=True)
class Concrete:
    """A resolved argument value."""

    value: Any

    def __post_init__(self):
        if isinstance(self.value, (Concrete, Placeholder, UseDefault)):
            raise TypeError(
                f"Concrete wraps a plain value, got {type(self.value).__name__}"
            )


@dataclass(frozen=True)
class Placeholder:
    """
    "Varying" marker: the value is deliberately left unresolved until an
    external tuning process substitutes it.

    ``label`` only identifies the placeholder for the tuner; it is never a
    value.
    """

    label: Optional[str] = None


@dataclass(frozen=True)
class UseDefault:
    """Leave the argument out of the native call (backend default applies)."""


ArgumentValue = Union[Concrete, Placeholder, UseDefault]

DEFAULT = UseDefault()


def varying(label: Optional[str] = None) -> Placeholder:
    return Placeholder(label=label)


def as_argument_value(value: Any) -> ArgumentValue:
    if isinstance(value, (Concrete, Placeholder, UseDefault)):
        return value
    return Concrete(value)


def coerce_mode(mode: Mode | str) -> Mode:
    # Mode("regression") / Mode(Mode.REGRESSION); unknown strings -> ValueError
    return mode if isinstance(mode, Mode) else Mode(mode)
