from __future__ import annotations

from eth_utils import add_0x_prefix, is_hex, remove_0x_prefix

from srm_dex.core.constants.base import SUI_ADDRESS_LENGTH


def normalize_sui_address(value: str) -> str:
    """Left-pad a hex address to 32 bytes and return it lowercase with ``0x``."""
    if not isinstance(value, str):
        raise TypeError(f"Sui address must be a string, got {type(value).__name__}")
    raw = remove_0x_prefix(value.strip()).lower()
    if not raw or not is_hex(add_0x_prefix(raw)):
        raise ValueError(f"Invalid Sui address: {value!r}")
    if len(raw) > SUI_ADDRESS_LENGTH * 2:
        raise ValueError(
            f"Sui address longer than {SUI_ADDRESS_LENGTH} bytes: {value!r}"
        )
    return add_0x_prefix(raw.rjust(SUI_ADDRESS_LENGTH * 2, "0"))


# Object ids share the address format
normalize_sui_object_id = normalize_sui_address


def address_from_bytes(data: bytes) -> str:
    if len(data) != SUI_ADDRESS_LENGTH:
        raise ValueError(
            f"Expected {SUI_ADDRESS_LENGTH} address bytes, got {len(data)}"
        )
    return add_0x_prefix(data.hex())
