"""
Built-in backends.

Registration is centralized and static: adding an engine means adding its
descriptor to one of these modules and listing the module below.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from . import boost_tree, linear_reg, logistic_reg, rand_forest

if TYPE_CHECKING:
    from unimodel.registry.registry import BackendRegistry

_MODULES = (rand_forest, boost_tree, linear_reg, logistic_reg)


def register_builtin_backends(registry: "BackendRegistry") -> "BackendRegistry":
    for module in _MODULES:
        registry.register_model_type(module.DEFINITION)
        for descriptor in module.DESCRIPTORS:
            registry.register(descriptor)
    return registry


__all__ = ["register_builtin_backends"]
