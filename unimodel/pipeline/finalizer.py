# unimodel/pipeline/finalizer.py
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from unimodel import logs
from unimodel.core.model_spec import ModelSpecification
from unimodel.core.types import Concrete, Mode, UseDefault
from unimodel.core.resolution import ensure_resolved
from unimodel.registry.descriptor import mode_values
from unimodel.registry.registry import BackendRegistry, resolve_registry
from unimodel.utils.errors import (
    MissingRequiredArgument,
    UnsupportedArgumentForEngine,
    UnsupportedMode,
)


@dataclass(frozen=True)
class FinalizedInvocation:
    """
    FinalizedInvocation（FINAL / FROZEN）

    Semantics:
    - produced only by finalize()
    - native_args are expressed in the engine's own vocabulary
    - never persisted
    """

    model_type: str
    engine: str
    mode: Mode
    native_args: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(
            self, "native_args", MappingProxyType(dict(self.native_args))
        )

    def __hash__(self) -> int:
        return hash(
            (self.model_type, self.engine, self.mode, frozenset(self.native_args.items()))
        )


def finalize(
    spec: ModelSpecification,
    engine_name: str,
    *,
    registry: Optional[BackendRegistry] = None,
) -> FinalizedInvocation:
    """
    Translate a fully resolved specification into an engine-native call.

    Order of checks:
    1. no Placeholder left           -> HasVaryingParameters
    2. engine registered             -> UnknownEngine
    3. mode set and supported        -> UnsupportedMode
       required canonical args set   -> MissingRequiredArgument
    4. canonical args translatable   -> UnsupportedArgumentForEngine
    5. engine args accepted          -> UnsupportedArgumentForEngine
    6. merge, engine args win
    """
    ensure_resolved(spec)

    descriptor = resolve_registry(registry).lookup(spec.model_type, engine_name)

    if spec.mode is Mode.UNSET or not descriptor.supports(spec.mode):
        raise UnsupportedMode(
            spec.mode.value, engine_name, mode_values(descriptor.supported_modes)
        )

    for name in sorted(descriptor.required_args):
        if isinstance(spec.args.get(name), UseDefault):
            raise MissingRequiredArgument(name, engine_name)

    translated: Dict[str, Any] = {}
    for name, value in spec.args.items():
        if isinstance(value, UseDefault):
            continue

        native = descriptor.native_name(name)
        if native is None:
            raise UnsupportedArgumentForEngine(name, engine_name)

        translated[native] = value.value

    passthrough: Dict[str, Any] = {}
    for name, value in spec.engine_args.items():
        if name not in descriptor.valid_native_args:
            raise UnsupportedArgumentForEngine(name, engine_name)

        if isinstance(value, UseDefault):
            continue
        passthrough[name] = value.value if isinstance(value, Concrete) else value

    overridden = sorted(set(translated) & set(passthrough))
    if overridden:
        logs.debug(
            f"[Finalizer] {spec.model_type}/{engine_name} engine args "
            f"override translated args: {overridden}"
        )

    native_args = {**translated, **passthrough}

    logs.debug(
        f"[Finalizer] {spec.model_type}/{engine_name} mode={spec.mode.value} "
        f"native_args={native_args}"
    )

    return FinalizedInvocation(
        model_type=spec.model_type,
        engine=engine_name,
        mode=spec.mode,
        native_args=native_args,
    )
