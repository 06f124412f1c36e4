"""
Method Signature
================

Immutable identity for a profiled method: the declaring type, the method
name and the names of its parameter types.
"""

import inspect
from typing import Any, Callable, Tuple

import attrs

from ..exceptions import SignatureError

UNANNOTATED_TYPE = "object"


def _type_name(annotation: Any) -> str:
    if annotation is inspect.Parameter.empty:
        return UNANNOTATED_TYPE
    if isinstance(annotation, str):
        return annotation
    if isinstance(annotation, type):
        return annotation.__qualname__
    # typing constructs such as Optional[int]
    return str(annotation).replace("typing.", "")


def _to_parameter_types(value: Any) -> Tuple[str, ...]:
    # A lone type name is one parameter, not a sequence of characters.
    if isinstance(value, str):
        return (value,)
    return tuple(value)


@attrs.frozen(order=True)
class MethodSignature:
    """Represents the identity of a single method."""

    declaring_type: str = attrs.field(validator=attrs.validators.instance_of(str))
    name: str = attrs.field(validator=attrs.validators.instance_of(str))
    parameter_types: Tuple[str, ...] = attrs.field(
        default=(),
        converter=_to_parameter_types,
        validator=attrs.validators.deep_iterable(
            member_validator=attrs.validators.instance_of(str),
            iterable_validator=attrs.validators.instance_of(tuple)
        )
    )

    @property
    def qualified_name(self) -> str:
        if not self.declaring_type:
            return self.name
        return f"{self.declaring_type}.{self.name}"

    def short_string(self) -> str:
        """Type and method name with the parameter list elided, e.g. ``Parser.feed(..)``."""
        simple_type = self.declaring_type.rsplit(".", 1)[-1]
        prefix = f"{simple_type}." if simple_type else ""
        return f"{prefix}{self.name}(..)"

    def long_string(self) -> str:
        """Fully qualified name with parameter types, e.g. ``pkg.Parser.feed(bytes, int)``."""
        return f"{self.qualified_name}({', '.join(self.parameter_types)})"

    def __str__(self) -> str:
        return self.long_string()

    @classmethod
    def from_callable(cls, func: Callable) -> "MethodSignature":
        """
        Build a signature for a Python callable.

        The declaring type is the defining module plus any enclosing class
        names. Unannotated parameters are reported as ``object``; a leading
        ``self`` or ``cls`` parameter is skipped.

        Raises:
            SignatureError: If ``func`` is not callable or has no inspectable signature
        """
        if not callable(func):
            raise SignatureError(f"Cannot derive a method signature from {func!r}")

        target = inspect.unwrap(func)
        target = getattr(target, "__func__", target)  # bound and class methods

        name = getattr(target, "__name__", None)
        if name is None:
            raise SignatureError(f"Callable {func!r} has no __name__")

        qualname = getattr(target, "__qualname__", name)
        owner = qualname.rsplit(".", 1)[0] if "." in qualname else ""
        owner = ".".join(part for part in owner.split(".") if part != "<locals>")
        module = getattr(target, "__module__", None) or ""
        declaring_type = ".".join(part for part in (module, owner) if part)

        try:
            parameters = list(inspect.signature(target).parameters.values())
        except (TypeError, ValueError) as e:
            raise SignatureError(f"Cannot inspect signature of {func!r}: {e}")

        if parameters and owner and parameters[0].name in ("self", "cls"):
            parameters = parameters[1:]

        return cls(
            declaring_type=declaring_type,
            name=name,
            parameter_types=tuple(_type_name(p.annotation) for p in parameters),
        )
