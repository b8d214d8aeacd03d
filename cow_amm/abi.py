"""
Helpers for encoding calls and decoding results and reverts against the ABI lists in
the `contracts` package without going through a web3 contract instance.
"""

from typing import Any, Optional

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError
from eth_utils import function_signature_to_4byte_selector
from eth_utils.abi import (
    abi_to_signature,
    get_abi_input_types,
    get_abi_output_types,
)

from cow_amm.constants import ERROR_STRING_SELECTOR, PANIC_SELECTOR
from cow_amm.errors import DecodeError


def get_abi_entry(
    abi: list[dict[str, Any]], name: str, kind: str = "function"
) -> dict[str, Any]:
    """Return the entry of type `kind` called `name`."""
    for entry in abi:
        if entry.get("type") == kind and entry.get("name") == name:
            return entry
    raise KeyError(f"{kind} {name} not found in ABI")


def selector(entry: dict[str, Any]) -> bytes:
    """4-byte selector of a function or error entry."""
    return function_signature_to_4byte_selector(abi_to_signature(entry))


def encode_call(abi: list[dict[str, Any]], name: str, args: list[Any]) -> bytes:
    """ABI encode a call to function `name` with positional `args`."""
    entry = get_abi_entry(abi, name)
    return selector(entry) + encode(get_abi_input_types(entry), args)


def decode_result(
    abi: list[dict[str, Any]], name: str, data: bytes
) -> tuple[Any, ...]:
    """Decode the return data of function `name`."""
    entry = get_abi_entry(abi, name)
    try:
        return decode(get_abi_output_types(entry), data)
    except DecodingError as err:
        raise DecodeError(f"Could not decode result of {name}: {err}") from err


def error_selectors(*abis: list[dict[str, Any]]) -> dict[bytes, dict[str, Any]]:
    """Map the selector of every custom error in `abis` to its ABI entry."""
    errors = {}
    for abi in abis:
        for entry in abi:
            if entry.get("type") == "error":
                errors[selector(entry)] = entry
    return errors


def decode_custom_error(
    data: bytes, errors: dict[bytes, dict[str, Any]]
) -> Optional[str]:
    """Render a custom error as `Name(arg, ...)` if its selector is known."""
    entry = errors.get(data[:4])
    if entry is None:
        return None
    try:
        args = decode(get_abi_input_types(entry), data[4:])
    except DecodingError:
        return None
    return f"{entry['name']}({', '.join(str(arg) for arg in args)})"


def decode_revert_reason(data: bytes) -> Optional[str]:
    """
    Decode the standard solidity revert payloads `Error(string)` and `Panic(uint256)`.
    Returns None if the payload is neither.
    """
    try:
        if data[:4] == ERROR_STRING_SELECTOR:
            return str(decode(["string"], data[4:])[0])
        if data[:4] == PANIC_SELECTOR:
            return f"panic code {hex(decode(['uint256'], data[4:])[0])}"
    except DecodingError:
        return None
    return None
