# unimodel/utils/errors.py
from __future__ import annotations

from typing import Iterable


class UnimodelError(RuntimeError):
    """
    Base class for every error raised by the translation / dispatch core.

    Errors are deterministic for a given specification and registry state:
    callers fix the specification, they do not retry.
    """


class UnknownModelType(UnimodelError):
    def __init__(self, model_type: str, available: Iterable[str] = ()):
        self.model_type = model_type
        self.available = sorted(available)
        super().__init__(
            f"Unknown model type '{model_type}'. "
            f"Available: {', '.join(self.available) or '<none>'}"
        )


class UnknownEngine(UnimodelError):
    def __init__(self, model_type: str, engine: str, available: Iterable[str] = ()):
        self.model_type = model_type
        self.engine = engine
        self.available = sorted(available)
        super().__init__(
            f"No engine '{engine}' registered for model type '{model_type}'. "
            f"Available: {', '.join(self.available) or '<none>'}"
        )


class UnknownArgument(UnimodelError):
    def __init__(self, model_type: str, name: str, valid: Iterable[str] = ()):
        self.model_type = model_type
        self.name = name
        self.valid = sorted(valid)
        super().__init__(
            f"'{name}' is not an argument of model type '{model_type}'. "
            f"Valid arguments: {', '.join(self.valid) or '<none>'}"
        )


class UnsupportedMode(UnimodelError):
    def __init__(self, mode: str, engine: str, supported: Iterable[str] = ()):
        self.mode = mode
        self.engine = engine
        self.supported = sorted(supported)
        super().__init__(
            f"Mode '{mode}' is not supported by engine '{engine}'. "
            f"Supported modes: {', '.join(self.supported) or '<none>'}"
        )


class HasVaryingParameters(UnimodelError):
    """
    Raised while any argument still holds a Placeholder.

    ``fields`` is sorted so two equal unresolved sets give equal errors.
    """

    def __init__(self, fields: Iterable[str]):
        self.fields = sorted(fields)
        super().__init__(
            "Specification has varying parameters that must be resolved "
            f"first: {', '.join(self.fields)}"
        )


class UnsupportedArgumentForEngine(UnimodelError):
    def __init__(self, argument: str, engine: str):
        self.argument = argument
        self.engine = engine
        super().__init__(
            f"Argument '{argument}' is not supported by engine '{engine}'"
        )


class MissingRequiredArgument(UnimodelError):
    def __init__(self, argument: str, engine: str):
        self.argument = argument
        self.engine = engine
        super().__init__(
            f"Engine '{engine}' requires a value for argument '{argument}'"
        )


class InvalidInputData(UnimodelError):
    """Fit data is not a mapping, or one of its keys shadows a native argument."""


class BackendExecutionError(UnimodelError):
    def __init__(self, engine: str, message: str):
        self.engine = engine
        self.message = message
        super().__init__(f"Engine '{engine}' failed during fit: {message}")


class RegistryFrozenError(UnimodelError):
    """Registration attempted after the startup phase was closed."""
