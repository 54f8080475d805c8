from .descriptor import BackendDescriptor, ModelTypeDefinition
from .registry import BackendRegistry, default_registry

__all__ = [
    "BackendDescriptor",
    "ModelTypeDefinition",
    "BackendRegistry",
    "default_registry",
]
