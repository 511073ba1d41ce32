"""Conversion options and expansion of presets into header descriptors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from .allowed import ConfigurationError, InvalidValueError, accept_allowed_value
from .models import HeaderDescriptor, HeaderKind, HeaderMap

DEFAULT_PRESET = "row"

PRESETS: Dict[str, tuple] = {
    "row": ((HeaderKind.ROW, 0, 0),),
    "column": ((HeaderKind.COLUMN, 0, 0),),
    "row.column": ((HeaderKind.ROW, 0, 0), (HeaderKind.COLUMN, 0, 0)),
    "column.row": ((HeaderKind.COLUMN, 0, 0), (HeaderKind.ROW, 0, 0)),
    "row.row": ((HeaderKind.ROW, 0, 0), (HeaderKind.ROW, 0, 1)),
    "column.column": ((HeaderKind.COLUMN, 0, 0), (HeaderKind.COLUMN, 1, 0)),
}

ALLOWED_PRESETS: List[Any] = [None, False, *PRESETS]
ALLOWED_KINDS: List[str] = [kind.value for kind in HeaderKind]

HeadersReadyHook = Callable[[HeaderMap], Optional[HeaderMap]]
HeaderSpec = Union[HeaderDescriptor, Mapping[str, Any]]


@dataclass
class TableConfig:
    """Options for a single conversion.

    ``headers`` overrides ``preset`` when non-empty. ``on_headers_ready`` is
    called with the discovered headers before any data is placed.
    """

    preset: Any = DEFAULT_PRESET
    headers: Optional[List[HeaderSpec]] = None
    on_headers_ready: Optional[HeadersReadyHook] = None

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "TableConfig":
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigurationError("Table configuration must be an object")
        unknown = set(data) - {"preset", "headers", "on_headers_ready"}
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
        headers = data.get("headers")
        if headers is not None and not isinstance(headers, (list, tuple)):
            raise ConfigurationError("'headers' must be a list")
        return cls(
            preset=data.get("preset", DEFAULT_PRESET),
            headers=list(headers) if headers is not None else None,
            on_headers_ready=data.get("on_headers_ready"),
        )

    def merged(self, **overrides: Any) -> "TableConfig":
        values = {
            "preset": self.preset,
            "headers": self.headers,
            "on_headers_ready": self.on_headers_ready,
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return TableConfig(**values)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _accept_option(value: Any, allowed: List[Any]) -> Any:
    # list input would be filtered rather than rejected
    if isinstance(value, (list, tuple)):
        raise InvalidValueError(value, allowed)
    return accept_allowed_value(value, allowed, True)


def validate_preset(preset: Any) -> Any:
    """Raise InvalidValueError unless ``preset`` names a built-in preset or is falsy."""
    return _accept_option(preset, ALLOWED_PRESETS)


def _header_field(spec: HeaderSpec, name: str) -> Any:
    if isinstance(spec, HeaderDescriptor):
        return getattr(spec, name)
    if isinstance(spec, Mapping):
        return spec.get(name)
    raise ConfigurationError(f"Header descriptor must be an object, got {type(spec).__name__}")


def _validate_header(spec: HeaderSpec) -> HeaderDescriptor:
    kind = _header_field(spec, "kind")
    if isinstance(kind, HeaderKind):
        kind = kind.value
    _accept_option(kind, ALLOWED_KINDS)
    anchor_column = _header_field(spec, "anchor_column")
    anchor_row = _header_field(spec, "anchor_row")
    accept_allowed_value(anchor_column, _is_number, True)
    accept_allowed_value(anchor_row, _is_number, True)
    return HeaderDescriptor(
        kind=HeaderKind(kind),
        anchor_column=anchor_column,
        anchor_row=anchor_row,
    )


def expand_preset(preset: Any) -> List[HeaderDescriptor]:
    """Return the canonical descriptors for ``preset`` (falsy means ``row``)."""
    validate_preset(preset)
    layout = PRESETS[preset or DEFAULT_PRESET]
    return [
        HeaderDescriptor(kind=kind, anchor_column=c, anchor_row=r)
        for kind, c, r in layout
    ]


def resolve_descriptors(config: TableConfig) -> List[HeaderDescriptor]:
    """Validate ``config`` and return its ordered header descriptors.

    Depth is always the position in the resulting list; any depth given by
    the caller is discarded.
    """
    validate_preset(config.preset)

    explicit: Sequence[HeaderSpec] = config.headers or []
    descriptors = [_validate_header(spec) for spec in explicit]
    if not descriptors:
        descriptors = expand_preset(config.preset)

    for index, descriptor in enumerate(descriptors):
        descriptor.depth = index
    return descriptors


def describe_presets() -> Dict[str, List[Dict[str, Any]]]:
    return {
        name: [descriptor.to_dict() for descriptor in resolve_descriptors(TableConfig(preset=name))]
        for name in PRESETS
    }
