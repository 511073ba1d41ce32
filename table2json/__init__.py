"""Convert tabular data into nested JSON records."""

__version__ = "1.0.0"

from .allowed import (
    ConfigurationError,
    InvalidValueError,
    NoAllowedValuesError,
    accept_allowed_value,
    keep_allowed_values,
)
from .converter import ConversionError, EmptyHeaderError, convert_table, convert_table_data_to_json
from .headers import discover_headers, headers_governing
from .models import (
    ABSENT,
    ConversionResult,
    HeaderDescriptor,
    HeaderDiscovery,
    HeaderInstance,
    HeaderKind,
    HeaderMap,
    OutputShape,
)
from .presets import PRESETS, TableConfig, resolve_descriptors

__all__ = [
    "convert_table_data_to_json",
    "convert_table",
    "TableConfig",
    "PRESETS",
    "resolve_descriptors",
    "discover_headers",
    "headers_governing",
    "keep_allowed_values",
    "accept_allowed_value",
    "ABSENT",
    "HeaderKind",
    "HeaderDescriptor",
    "HeaderInstance",
    "HeaderDiscovery",
    "HeaderMap",
    "OutputShape",
    "ConversionResult",
    "ConfigurationError",
    "InvalidValueError",
    "NoAllowedValuesError",
    "ConversionError",
    "EmptyHeaderError",
]
