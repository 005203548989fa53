"""Loading and evaluation errors shared by every structure engine.

Everything raised while reading a blueprint derives from ``LoadingError`` so
that a host can reject a whole template with a single ``except`` clause.
"""
from __future__ import annotations

from typing import Optional


class LoadingError(Exception):
    """Raised when loading a resource from configuration fails."""


class ExpressionError(LoadingError):
    """Raised when an expression can't be parsed, bound or evaluated."""

    def __init__(self, message: str, expression: Optional[str] = None):
        super().__init__(message)
        self.expression = expression


class ExpressionSyntaxError(ExpressionError):
    """The expression text is malformed."""


class UnknownFunctionError(ExpressionError):
    """The expression calls a function that isn't registered (or with a bad arity)."""

    def __init__(self, name: str, message: Optional[str] = None, expression: Optional[str] = None):
        super().__init__(message or f'Unknown function "{name}"', expression)
        self.name = name


class UnresolvedVariableError(ExpressionError):
    """The expression references a variable missing from its environment."""

    def __init__(self, name: str, expression: Optional[str] = None):
        super().__init__(f'Unresolved variable "{name}"', expression)
        self.name = name


class MaterialSetterLoadingError(LoadingError):
    """Raised when a material setter or its picker can't be configured."""

    @classmethod
    def wrap(cls, name: str, cause: Exception) -> "MaterialSetterLoadingError":
        err = cls(f'Could not load material setter "{name}": {cause}')
        err.__cause__ = cause
        return err


class InstructionLoadingError(LoadingError):
    """Raised when an instruction can't be loaded."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field

    @classmethod
    def wrap(cls, name: str, cause: Exception) -> "InstructionLoadingError":
        err = cls(f'Could not load instruction "{name}": {cause}', getattr(cause, "field", None))
        err.__cause__ = cause
        return err


class ShapeLoadingError(InstructionLoadingError):
    """Raised when a shape can't be created or is missing a size key."""

    def __init__(self, message: str, key: Optional[str] = None):
        super().__init__(message, field="size" if key else "shape")
        self.key = key

    @classmethod
    def missing_size(cls, key: str) -> "ShapeLoadingError":
        return cls(f"{key} size is missing", key=key)


class IWGOLoadingError(LoadingError):
    """Raised when a whole structure template can't be loaded."""

    @classmethod
    def wrap(cls, name: str, cause: Exception) -> "IWGOLoadingError":
        err = cls(f'Could not load IWGO "{name}": {cause}')
        err.__cause__ = cause
        return err


class InstructionStateError(RuntimeError):
    """An instruction was randomized or drawn before it was loaded."""
