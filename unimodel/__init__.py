#!filepath: unimodel/__init__.py

# logs first: every submodule does `from unimodel import logs`
from .utils.logger import Logging, logs, init_logging
from .utils.errors import (
    BackendExecutionError,
    HasVaryingParameters,
    InvalidInputData,
    MissingRequiredArgument,
    RegistryFrozenError,
    UnimodelError,
    UnknownArgument,
    UnknownEngine,
    UnknownModelType,
    UnsupportedArgumentForEngine,
    UnsupportedMode,
)
from .config.app_config import AppConfig
from .core import (
    DEFAULT,
    Concrete,
    Mode,
    ModelSpecification,
    Placeholder,
    UseDefault,
    create,
    is_resolved,
    unresolved_fields,
    varying,
    varying_args,
    with_arg,
    with_args,
    with_engine_args,
    with_mode,
)
from .registry import (
    BackendDescriptor,
    BackendRegistry,
    ModelTypeDefinition,
    default_registry,
)
from .pipeline import FinalizedInvocation, finalize, fit, fit_many

__version__ = "0.1.0"

__all__ = [
    "logs", "Logging", "init_logging",
    "AppConfig",
    "UnimodelError",
    "UnknownModelType",
    "UnknownEngine",
    "UnknownArgument",
    "UnsupportedMode",
    "HasVaryingParameters",
    "UnsupportedArgumentForEngine",
    "MissingRequiredArgument",
    "InvalidInputData",
    "BackendExecutionError",
    "RegistryFrozenError",
    "DEFAULT",
    "Concrete",
    "Placeholder",
    "UseDefault",
    "Mode",
    "ModelSpecification",
    "create",
    "with_arg",
    "with_args",
    "with_mode",
    "with_engine_args",
    "varying",
    "is_resolved",
    "unresolved_fields",
    "varying_args",
    "BackendDescriptor",
    "BackendRegistry",
    "ModelTypeDefinition",
    "default_registry",
    "FinalizedInvocation",
    "finalize",
    "fit",
    "fit_many",
]
