"""BCS (Binary Canonical Serialization) helpers for Sui call arguments.

Wire types come from pysui's BCS schema and are serialized with canoser, the
BCS engine pysui is built on. This module adds what the SDK needs around
them: pure argument encoding, Move type-string parsing into pysui type tags,
and decoding of simulated return values by their reported Move type.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from canoser import ArrayT, BoolT, Cursor, Uint8, Uint16, Uint32, Uint64, Uint128
from pysui.sui.sui_types import bcs as sui_bcs

from srm_dex.core.constants.base import SUI_ADDRESS_LENGTH
from srm_dex.core.utils.sui import address_from_bytes, normalize_sui_address

_UINT_TYPES = {
    "u8": Uint8,
    "u16": Uint16,
    "u32": Uint32,
    "u64": Uint64,
    "u128": Uint128,
}
_U256_LENGTH = 32

# Variant indexes of the Move TypeTag enum
_PRIMITIVE_TAG_IDS = {
    "bool": 0,
    "u8": 1,
    "u64": 2,
    "u128": 3,
    "address": 4,
    "signer": 5,
    "u16": 8,
    "u32": 9,
    "u256": 10,
}
_VECTOR_TAG_ID = 6
_STRUCT_TAG_ID = 7

_STRING_STRUCTS = {("0x1", "string", "String"), ("0x1", "ascii", "String")}
_ID_STRUCTS = {("0x2", "object", "ID"), ("0x2", "object", "UID")}


class UnsupportedTypeError(ValueError):
    pass


class BcsDecodeError(ValueError):
    pass


@dataclass(frozen=True)
class VectorTag:
    element: TypeTag


@dataclass(frozen=True)
class StructTag:
    address: str
    module: str
    name: str
    type_params: tuple[TypeTag, ...] = ()

    def short_key(self) -> tuple[str, str, str]:
        short = "0x" + (self.address[2:].lstrip("0") or "0")
        return short, self.module, self.name


TypeTag = str | VectorTag | StructTag


def variant(enum_type: type, index: int, value: Any = None) -> Any:
    """Build variant ``index`` of a pysui BCS enum, addressed by its wire index."""
    name, _ = enum_type._enums[index]
    return enum_type(name, value)


# ---------------------------------------------------------------------------
# Pure values
# ---------------------------------------------------------------------------


def _check_uint(value: int, bits: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"u{bits} value must be an int, got {type(value).__name__}")
    if value < 0 or value >= 1 << bits:
        raise ValueError(f"{value} does not fit in u{bits}")


def encode_u64(value: int) -> bytes:
    _check_uint(value, 64)
    return Uint64.encode(value)


def encode_bool(value: bool) -> bytes:
    if not isinstance(value, bool):
        raise TypeError(f"bool value must be a bool, got {type(value).__name__}")
    return BoolT.encode(value)


def address_tag(value: str) -> sui_bcs.Address:
    return sui_bcs.Address(list(bytes.fromhex(normalize_sui_address(value)[2:])))


def encode_address(value: str) -> bytes:
    return address_tag(value).serialize()


def encode_bytes(value: bytes | bytearray) -> bytes:
    if not isinstance(value, (bytes, bytearray)):
        raise TypeError(f"byte vector must be bytes, got {type(value).__name__}")
    return ArrayT(Uint8).encode(list(value))


# ---------------------------------------------------------------------------
# Move type tags
# ---------------------------------------------------------------------------


def _split_type_params(text: str) -> list[str]:
    params: list[str] = []
    depth = 0
    start = 0
    for idx, char in enumerate(text):
        if char == "<":
            depth += 1
        elif char == ">":
            depth -= 1
        elif char == "," and depth == 0:
            params.append(text[start:idx].strip())
            start = idx + 1
    params.append(text[start:].strip())
    return [p for p in params if p]


def parse_type_tag(type_str: str) -> TypeTag:
    text = type_str.strip()
    if text in _PRIMITIVE_TAG_IDS:
        return text
    if text.startswith("vector<") and text.endswith(">"):
        return VectorTag(parse_type_tag(text[len("vector<") : -1]))

    base, params = text, ()
    if text.endswith(">"):
        open_idx = text.find("<")
        if open_idx <= 0:
            raise ValueError(f"Malformed type tag: {type_str!r}")
        base = text[:open_idx]
        params = tuple(
            parse_type_tag(p) for p in _split_type_params(text[open_idx + 1 : -1])
        )

    parts = base.split("::")
    if len(parts) != 3 or not all(parts):
        raise ValueError(f"Malformed type tag: {type_str!r}")
    address, module, name = parts
    return StructTag(normalize_sui_address(address), module, name, params)


def to_type_tag(tag: TypeTag) -> sui_bcs.TypeTag:
    if isinstance(tag, str):
        return variant(sui_bcs.TypeTag, _PRIMITIVE_TAG_IDS[tag])
    if isinstance(tag, VectorTag):
        return variant(sui_bcs.TypeTag, _VECTOR_TAG_ID, to_type_tag(tag.element))
    return variant(
        sui_bcs.TypeTag,
        _STRUCT_TAG_ID,
        sui_bcs.StructTag(
            address_tag(tag.address),
            tag.module,
            tag.name,
            [to_type_tag(p) for p in tag.type_params],
        ),
    )


# ---------------------------------------------------------------------------
# Return values
# ---------------------------------------------------------------------------


def _read_length(cursor: Cursor) -> int:
    return Uint32.parse_uint32_from_uleb128(cursor)


def _read_address(cursor: Cursor) -> str:
    return address_from_bytes(bytes(cursor.read_bytes(SUI_ADDRESS_LENGTH)))


def _read_tagged(cursor: Cursor, tag: TypeTag) -> Any:
    if isinstance(tag, str):
        if tag in _UINT_TYPES:
            return _UINT_TYPES[tag].decode(cursor)
        if tag == "u256":
            return int.from_bytes(cursor.read_bytes(_U256_LENGTH), "little")
        if tag == "bool":
            byte = Uint8.decode(cursor)
            if byte > 1:
                raise ValueError(f"Invalid BCS bool byte: {byte}")
            return byte == 1
        if tag == "address":
            return _read_address(cursor)
        raise UnsupportedTypeError(f"Cannot decode values of type {tag}")

    if isinstance(tag, VectorTag):
        length = _read_length(cursor)
        if tag.element == "u8":
            return bytes(cursor.read_bytes(length))
        return [_read_tagged(cursor, tag.element) for _ in range(length)]

    key = tag.short_key()
    if key in _STRING_STRUCTS:
        return bytes(cursor.read_bytes(_read_length(cursor))).decode("utf-8")
    if key in _ID_STRUCTS:
        return _read_address(cursor)
    if key == ("0x1", "option", "Option") and len(tag.type_params) == 1:
        size = _read_length(cursor)
        if size > 1:
            raise ValueError(f"Option encoded with {size} elements")
        return _read_tagged(cursor, tag.type_params[0]) if size else None
    raise UnsupportedTypeError(f"Cannot decode struct {'::'.join(key)}")


def decode_value(type_str: str, data: bytes | bytearray | list[int]) -> Any:
    """Decode one BCS-encoded return value reported with Move type ``type_str``.

    Raises ``UnsupportedTypeError`` for types this module cannot read and
    ``BcsDecodeError`` when the bytes do not hold a value of that type.
    """
    tag = parse_type_tag(type_str)
    try:
        cursor = Cursor(bytes(data))
        value = _read_tagged(cursor, tag)
    except UnsupportedTypeError:
        raise
    # canoser reports short buffers as OSError
    except (OSError, TypeError, ValueError, IndexError) as exc:
        raise BcsDecodeError(f"Cannot decode {type_str}: {exc}") from exc
    if not cursor.is_finished():
        raise BcsDecodeError(f"Trailing bytes after decoding {type_str}")
    return value
