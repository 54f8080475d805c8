from .types import (
    DEFAULT,
    ArgumentValue,
    Concrete,
    Mode,
    Placeholder,
    UseDefault,
    varying,
)
from .model_spec import (
    ModelSpecification,
    create,
    with_arg,
    with_args,
    with_engine_args,
    with_mode,
)
from .resolution import VaryingArg, is_resolved, unresolved_fields, varying_args

__all__ = [
    "DEFAULT",
    "ArgumentValue",
    "Concrete",
    "Mode",
    "Placeholder",
    "UseDefault",
    "varying",
    "ModelSpecification",
    "create",
    "with_arg",
    "with_args",
    "with_engine_args",
    "with_mode",
    "VaryingArg",
    "is_resolved",
    "unresolved_fields",
    "varying_args",
]
