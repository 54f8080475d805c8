# unimodel/registry/descriptor.py
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, FrozenSet, Iterable, Mapping, Tuple

from unimodel.core.types import Mode, coerce_mode

FitFn = Callable[..., Any]


# ============================================================
# Model type definition (FROZEN)
# ============================================================
@dataclass(frozen=True)
class ModelTypeDefinition:
    """
    Canonical vocabulary of one model family.

    - canonical_args: backend-agnostic argument names, in display order
    - default_mode: mode given to freshly created specifications
    """

    name: str
    canonical_args: Tuple[str, ...]
    default_mode: Mode = Mode.UNSET

    def __post_init__(self):
        object.__setattr__(self, "canonical_args", tuple(self.canonical_args))
        object.__setattr__(self, "default_mode", coerce_mode(self.default_mode))
        if len(set(self.canonical_args)) != len(self.canonical_args):
            raise ValueError(
                f"[ModelTypeDefinition] duplicate canonical args for {self.name}"
            )


# ============================================================
# Backend descriptor (FROZEN)
# ============================================================
@dataclass(frozen=True)
class BackendDescriptor:
    """
    BackendDescriptor（FINAL / FROZEN）

    Semantics:
    - one descriptor per (model_type, engine_name)
    - arg_name_map: canonical name -> native name
    - valid_native_args: native names accepted through engine_args;
      every native name produced by arg_name_map is included
    - required_args: canonical names the engine cannot run without
    - fit_fn(call_args, mode=...) -> opaque model handle
    """

    engine_name: str
    model_type: str
    supported_modes: FrozenSet[Mode]
    arg_name_map: Mapping[str, str]
    fit_fn: FitFn
    valid_native_args: FrozenSet[str] = field(default_factory=frozenset)
    required_args: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        required = frozenset(self.required_args)
        if not required <= set(self.arg_name_map):
            raise ValueError(
                f"[BackendDescriptor] {self.model_type}/{self.engine_name} "
                f"requires unmapped args: {sorted(required - set(self.arg_name_map))}"
            )
        object.__setattr__(self, "required_args", required)

        modes = frozenset(coerce_mode(m) for m in self.supported_modes)
        if Mode.UNSET in modes:
            raise ValueError(
                f"[BackendDescriptor] {self.model_type}/{self.engine_name} "
                f"cannot declare the unset mode as supported"
            )

        name_map = dict(self.arg_name_map)
        valid = frozenset(self.valid_native_args) | frozenset(name_map.values())

        object.__setattr__(self, "supported_modes", modes)
        object.__setattr__(self, "arg_name_map", MappingProxyType(name_map))
        object.__setattr__(self, "valid_native_args", valid)

    @property
    def key(self) -> Tuple[str, str]:
        return self.model_type, self.engine_name

    def supports(self, mode: Mode) -> bool:
        return mode in self.supported_modes

    def native_name(self, canonical: str) -> str | None:
        return self.arg_name_map.get(canonical)


def mode_values(modes: Iterable[Mode]) -> list[str]:
    return sorted(m.value for m in modes)
