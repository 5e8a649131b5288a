"""
Optional scalar fields.

Stripe uses absent and ``null`` fields meaningfully: an unpaid invoice has
``"charge": null``, which is not the same thing as a charge whose id happens
to be empty. ``String`` and ``Int64`` keep that information instead of
collapsing it into ``""`` or ``0``.

A field is in one of three states:

- absent: the key was not in the JSON object
- null: the key was present with a ``null`` value
- present: the key held a concrete scalar

``value()`` returns the scalar's zero value unless the field is present, and
``present()`` reports whether a real value existed.
"""

from enum import Enum
from typing import Any, ClassVar

from pydantic import GetCoreSchemaHandler
from pydantic_core import PydanticCustomError, core_schema


class FieldState(str, Enum):
    absent = "absent"
    null = "null"
    present = "present"


class OptionalScalar:
    """Base class for three-state scalar fields; subclasses pin the scalar type."""

    scalar_type: ClassVar[type] = object
    zero: ClassVar[Any] = None

    __slots__ = ("_state", "_value")

    def __init__(self, value: Any = None, state: FieldState = FieldState.absent):
        if state is FieldState.present:
            value = self._check(value)
        else:
            value = self.zero
        object.__setattr__(self, "_state", state)
        object.__setattr__(self, "_value", value)

    @classmethod
    def absent(cls):
        return cls()

    @classmethod
    def null(cls):
        return cls(state=FieldState.null)

    @classmethod
    def of(cls, value):
        return cls(value, FieldState.present)

    @classmethod
    def _check(cls, value):
        # bool is an int subclass; JSON true/false must not pass as a number
        if isinstance(value, bool) and cls.scalar_type is not bool:
            raise TypeError(f"expected {cls.scalar_type.__name__}, got bool")
        if not isinstance(value, cls.scalar_type):
            raise TypeError(
                f"expected {cls.scalar_type.__name__}, got {type(value).__name__}"
            )
        return value

    def value(self):
        return self._value

    def present(self) -> bool:
        return self._state is FieldState.present

    def is_null(self) -> bool:
        return self._state is FieldState.null

    @property
    def state(self) -> FieldState:
        return self._state

    def get(self, default=None):
        """Return the value when present, otherwise ``default``."""
        return self._value if self.present() else default

    def __bool__(self):
        return self.present()

    def __eq__(self, other):
        if isinstance(other, OptionalScalar):
            return (
                type(self) is type(other)
                and self._state is other._state
                and self._value == other._value
            )
        if self.present() and isinstance(other, self.scalar_type):
            return self._value == other
        return NotImplemented

    def __hash__(self):
        if self.present():
            return hash(self._value)
        return hash((type(self).__name__, self._state))

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        return (type(self), (self._value, self._state))

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __repr__(self):
        if self.present():
            return f"{type(self).__name__}({self._value!r})"
        return f"{type(self).__name__}.{self._state.value}()"

    @classmethod
    def _validate(cls, raw: Any):
        if isinstance(raw, cls):
            return raw
        if raw is None:
            return cls.null()
        try:
            return cls.of(raw)
        except (TypeError, ValueError) as e:
            raise PydanticCustomError(
                "optional_scalar_type", "{error}", {"error": str(e)}
            ) from e

    @staticmethod
    def _serialize(field: "OptionalScalar"):
        return field.value() if field.present() else None

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                cls._serialize
            ),
        )


class String(OptionalScalar):
    """A JSON string that may be absent or null."""

    scalar_type = str
    zero = ""
    __slots__ = ()

    def __str__(self):
        return self._value


class Int64(OptionalScalar):
    """A JSON integer that may be absent or null."""

    scalar_type = int
    zero = 0
    __slots__ = ()

    @classmethod
    def _check(cls, value):
        value = super()._check(value)
        if not -(2**63) <= value < 2**63:
            raise ValueError(f"{value} does not fit in a signed 64-bit integer")
        return value

    def __int__(self):
        return self._value
