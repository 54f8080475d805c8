#!filepath: unimodel/registry/registry.py
from __future__ import annotations

import threading
from typing import Dict, List, Optional, Tuple

from unimodel import logs
from unimodel.registry.descriptor import BackendDescriptor, ModelTypeDefinition
from unimodel.utils.errors import (
    RegistryFrozenError,
    UnknownEngine,
    UnknownModelType,
)


class BackendRegistry:
    """
    BackendRegistry（read-mostly）

    Semantics:
    - model types and backend descriptors are registered during startup
    - freeze() closes the startup phase; later registration -> crash
    - lookups never mutate, so concurrent readers need no lock
    """

    def __init__(self):
        self._model_types: Dict[str, ModelTypeDefinition] = {}
        self._backends: Dict[Tuple[str, str], BackendDescriptor] = {}
        self._frozen = False

    # --------------------------------------------------
    # Registration (startup only)
    # --------------------------------------------------
    def register_model_type(self, definition: ModelTypeDefinition) -> None:
        self._ensure_writable()
        self._model_types[definition.name] = definition

    def register(self, descriptor: BackendDescriptor) -> None:
        """
        Add or replace the descriptor for (model_type, engine_name).
        """
        self._ensure_writable()

        if descriptor.model_type not in self._model_types:
            raise UnknownModelType(descriptor.model_type, self._model_types)

        definition = self._model_types[descriptor.model_type]
        unknown = set(descriptor.arg_name_map) - set(definition.canonical_args)
        if unknown:
            raise ValueError(
                f"[BackendRegistry] {descriptor.key} maps non-canonical "
                f"args: {sorted(unknown)}"
            )

        if descriptor.key in self._backends:
            logs.debug(f"[BackendRegistry] replace {descriptor.key}")

        self._backends[descriptor.key] = descriptor

    def freeze(self) -> "BackendRegistry":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _ensure_writable(self) -> None:
        if self._frozen:
            raise RegistryFrozenError(
                "[BackendRegistry] registry is frozen; register backends "
                "before the first lookup"
            )

    # --------------------------------------------------
    # Lookup (read-only)
    # --------------------------------------------------
    def model_type(self, name: str) -> ModelTypeDefinition:
        if name not in self._model_types:
            raise UnknownModelType(name, self._model_types)
        return self._model_types[name]

    def model_types(self) -> List[str]:
        return sorted(self._model_types)

    def lookup(self, model_type: str, engine_name: str) -> BackendDescriptor:
        key = (model_type, engine_name)

        if key not in self._backends:
            available = [e for (m, e) in self._backends if m == model_type]
            raise UnknownEngine(model_type, engine_name, available)

        return self._backends[key]

    def engines(self, model_type: Optional[str] = None) -> List[BackendDescriptor]:
        """
        Registered descriptors sorted by (model_type, engine).
        """
        if model_type is not None:
            self.model_type(model_type)

        return [
            self._backends[key]
            for key in sorted(self._backends)
            if model_type is None or key[0] == model_type
        ]


# ------------------------------------------------------------------
# Default registry (built once, frozen)
# ------------------------------------------------------------------
_DEFAULT: Optional[BackendRegistry] = None
_DEFAULT_LOCK = threading.Lock()


def default_registry() -> BackendRegistry:
    global _DEFAULT

    if _DEFAULT is None:
        with _DEFAULT_LOCK:
            if _DEFAULT is None:
                from unimodel.backends import register_builtin_backends

                registry = BackendRegistry()
                register_builtin_backends(registry)
                _DEFAULT = registry.freeze()

                logs.debug(
                    f"[BackendRegistry] default registry ready "
                    f"model_types={registry.model_types()}"
                )

    return _DEFAULT


def resolve_registry(registry: Optional[BackendRegistry]) -> BackendRegistry:
    return registry if registry is not None else default_registry()
