"""Allow-list checks used to validate conversion options."""

from __future__ import annotations

from typing import Any, Callable, Iterable, List, Optional, Sequence, Union

__all__ = [
    "ConfigurationError",
    "NoAllowedValuesError",
    "InvalidValueError",
    "keep_allowed_values",
    "accept_allowed_value",
]

AllowedValues = Union[Sequence[Any], set, frozenset, Callable[[Any], bool]]


class ConfigurationError(ValueError):
    """Raised when conversion options fail validation."""


class NoAllowedValuesError(ConfigurationError):
    """Raised when a check is given nothing to compare against."""

    def __init__(self) -> None:
        super().__init__("No allowed values specified")


class InvalidValueError(ConfigurationError):
    """Raised when a value is not in the allowed set."""

    def __init__(self, value: Any, allowed: Optional[Iterable[Any]] = None) -> None:
        self.value = value
        self.allowed = list(allowed) if allowed is not None else None
        if self.allowed is None:
            message = "Invalid value given"
        else:
            message = "Invalid value given, must be one of: " + ", ".join(
                _describe(item) for item in self.allowed
            )
        super().__init__(message)


def _describe(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _same_value(a: Any, b: Any) -> bool:
    # bool is an int subclass; keep True/1 and False/0 apart
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a is b
    if a is None or b is None:
        return a is b
    return a == b


def _is_literal_collection(allowed: Any) -> bool:
    return isinstance(allowed, (list, tuple, set, frozenset))


def _matches(value: Any, allowed: AllowedValues) -> bool:
    if callable(allowed):
        return bool(allowed(value))
    return any(_same_value(value, item) for item in allowed)


def keep_allowed_values(values: Any, allowed: Optional[AllowedValues] = None) -> List[Any]:
    """Return the items of ``values`` that match ``allowed``, in their original order."""
    if not isinstance(values, (list, tuple)) or not values:
        return []
    if callable(allowed):
        return [value for value in values if allowed(value)]
    if not _is_literal_collection(allowed) or not allowed:
        return []
    return [value for value in values if _matches(value, allowed)]


def accept_allowed_value(
    value: Any,
    allowed: AllowedValues,
    throw_on_reject: bool = False,
) -> Any:
    """Return ``value`` if allowed, otherwise ``None`` or raise.

    A list or tuple ``value`` is filtered instead, and the matching subset is
    returned when it is non-empty.
    """
    if not (callable(allowed) or (_is_literal_collection(allowed) and allowed)):
        raise NoAllowedValuesError()

    if isinstance(value, (list, tuple)):
        accepted = keep_allowed_values(value, allowed)
        if accepted:
            return accepted
    elif _matches(value, allowed):
        return value

    if throw_on_reject:
        if callable(allowed):
            raise InvalidValueError(value)
        raise InvalidValueError(value, allowed)
    return None
