"""Field coercion rules for form-submitted values.

Every value may arrive as a string because admin forms post multipart
bodies. Each coercer turns a raw value into the stored type. All of them
are total except ``parse_structured`` in strict mode.
"""

import json
import math
import re
from typing import Any, Callable

from brewbase.domain.entities.entity_schema import FieldKind
from brewbase.domain.exceptions import StructuredInputError

_FLOAT_PREFIX = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INT_PREFIX = re.compile(r"^\s*[+-]?\d+")


def to_bool(value: Any) -> bool:
    """Only the string 'true' and the boolean True are truthy."""
    return value is True or value == "true"


def to_float(value: Any) -> float:
    """Parse the leading numeric prefix of a value, 0 when there is none.

    Non-finite results (NaN, infinities) also give 0, since JSON cannot
    store them.

    Examples:
        >>> to_float("12.5%")
        12.5
        >>> to_float("abc")
        0.0
    """
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return 0.0
    else:
        match = _FLOAT_PREFIX.match(str(value))
        if not match:
            return 0.0
        number = float(match.group(0))
    return number if math.isfinite(number) else 0.0


def to_int(value: Any) -> int:
    """Parse the leading integer prefix of a value, 0 when there is none."""
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    if isinstance(value, int):
        return value
    match = _INT_PREFIX.match(str(value))
    if not match:
        return 0
    return int(match.group(0))


def to_list(value: Any) -> list[Any]:
    """Normalize comma-separated text or a list into a list.

    Examples:
        >>> to_list("fruity, floral,, ")
        ['fruity', 'floral']
    """
    if not value:
        return []
    if isinstance(value, list):
        return value
    if isinstance(value, str):
        return [segment.strip() for segment in value.split(",") if segment.strip()]
    return [value]


def to_images(value: Any) -> list[Any]:
    """Keep image lists only; filenames come from the upload pipeline."""
    return value if isinstance(value, list) else []


def to_upper(value: Any) -> str:
    return str(value or "").upper()


def structured_fallback(kind: FieldKind) -> list[Any] | dict[str, Any]:
    """Value used when a structured field is missing or unparseable."""
    return {} if kind is FieldKind.STRUCTURED_MAPPING else []


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_structured(
    value: Any,
    field_name: str,
    kind: FieldKind,
    strict: bool = True,
) -> Any:
    """Parse a nested field that may arrive as serialized JSON.

    Args:
        value: Raw value; non-text values are returned unchanged.
        field_name: Field name for error messages.
        kind: STRUCTURED_LIST or STRUCTURED_MAPPING, selects the fallback.
        strict: If True, malformed JSON raises; otherwise the fallback
            (empty list or empty mapping) is returned.

    Raises:
        StructuredInputError: If strict and the text is not valid JSON.
    """
    if is_blank(value):
        return structured_fallback(kind)
    if not isinstance(value, str):
        return value
    try:
        return json.loads(value)
    except json.JSONDecodeError as e:
        if strict:
            raise StructuredInputError(field_name, str(e)) from e
        return structured_fallback(kind)


SIMPLE_COERCERS: dict[FieldKind, Callable[[Any], Any]] = {
    FieldKind.BOOLEAN: to_bool,
    FieldKind.FLOAT: to_float,
    FieldKind.INTEGER: to_int,
    FieldKind.LIST: to_list,
    FieldKind.IMAGES: to_images,
    FieldKind.UPPERCASE: to_upper,
}


def coerce(
    value: Any,
    field_name: str,
    kind: FieldKind,
    strict: bool = True,
) -> Any:
    """Coerce a raw value according to its field kind."""
    if kind.is_structured:
        return parse_structured(value, field_name, kind, strict=strict)
    return SIMPLE_COERCERS[kind](value)
