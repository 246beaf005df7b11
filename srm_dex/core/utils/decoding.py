"""Table-driven decoding of simulated-call return rows into typed results.

A ``DecodeShape`` lists the positional fields an on-chain view function
returns. ``decode`` checks the row against the shape and either returns the
fully populated result or raises ``MalformedResult``; nothing partial escapes.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Generic, TypeVar

from srm_dex.core.constants.base import SUI_ADDRESS_LENGTH
from srm_dex.core.utils.sui import address_from_bytes, normalize_sui_address

_BCS_UINT_WIDTHS = {1, 2, 4, 8, 16, 32}

R = TypeVar("R")


class MalformedResult(ValueError):
    def __init__(self, operation: str, reason: str):
        self.operation = operation
        self.reason = reason
        super().__init__(f"Failed to decode {operation}: {reason}")


class FieldKind(StrEnum):
    NUMERIC = "numeric"
    STRING = "string"


@dataclass(frozen=True)
class FieldSpec:
    name: str
    kind: FieldKind = FieldKind.NUMERIC
    # Result attribute, when it differs from the on-chain field name
    attr: str | None = None

    @property
    def target(self) -> str:
        return self.attr or self.name


@dataclass(frozen=True)
class DecodeShape(Generic[R]):
    operation: str
    fields: tuple[FieldSpec, ...]
    result_type: Callable[..., R]


def _is_row(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(
        value, (str, bytes, bytearray)
    )


def _is_byte_list(value: Any) -> bool:
    return isinstance(value, list) and all(
        isinstance(b, int) and not isinstance(b, bool) and 0 <= b <= 255
        for b in value
    )


def to_int(value: Any) -> int:
    """Coerce a raw on-chain unsigned integer without losing precision."""
    if isinstance(value, bool):
        raise TypeError("bool is not a numeric value")
    if isinstance(value, int):
        result = value
    elif isinstance(value, str):
        result = int(value.strip(), 10)
    elif isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{value} is not an integer")
        result = int(value)
    elif isinstance(value, (bytes, bytearray)) or _is_byte_list(value):
        raw = bytes(value)
        if len(raw) not in _BCS_UINT_WIDTHS:
            raise ValueError(f"{len(raw)} bytes is not a BCS integer width")
        result = int.from_bytes(raw, "little")
    else:
        raise TypeError(f"cannot read a number from {type(value).__name__}")
    if result < 0:
        raise ValueError(f"{result} is negative")
    return result


def to_str(value: Any) -> str:
    if isinstance(value, str):
        if value.startswith("0x"):
            return normalize_sui_address(value)
        return value
    if isinstance(value, (bytes, bytearray)) or _is_byte_list(value):
        if len(value) == SUI_ADDRESS_LENGTH:
            return address_from_bytes(bytes(value))
    raise TypeError(f"cannot read a string from {type(value).__name__}")


_COERCERS: dict[FieldKind, Callable[[Any], Any]] = {
    FieldKind.NUMERIC: to_int,
    FieldKind.STRING: to_str,
}


def extract_result_row(results: Any) -> Any:
    """Pick the row to decode out of ``simulate`` output.

    The first command's return values form the row, unless the command
    returned a single sequence (a Move vector), in which case that sequence
    is the row. Returns ``None`` when there is nothing to decode.
    """
    if not _is_row(results) or not results:
        return None
    first = results[0]
    if not _is_row(first) or not first:
        return None
    if len(first) == 1 and _is_row(first[0]):
        return first[0]
    return first


def decode(shape: DecodeShape[R], raw: Any) -> R:
    if raw is None:
        raise MalformedResult(shape.operation, "no result returned")
    if not _is_row(raw):
        raise MalformedResult(
            shape.operation, f"expected a sequence, got {type(raw).__name__}"
        )
    if len(raw) < len(shape.fields):
        raise MalformedResult(
            shape.operation,
            f"expected at least {len(shape.fields)} values, got {len(raw)}",
        )

    values: dict[str, Any] = {}
    for field, element in zip(shape.fields, raw, strict=False):
        try:
            values[field.target] = _COERCERS[field.kind](element)
        except (TypeError, ValueError) as exc:
            raise MalformedResult(
                shape.operation, f"field {field.name}: {exc}"
            ) from exc
    return shape.result_type(**values)
