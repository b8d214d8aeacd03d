"""
Configuration read from the environment (and a `.env` file) plus the static table of
supported networks.
"""

from __future__ import annotations
import json
from dataclasses import dataclass
from os import getenv
from typing import Optional
from urllib.parse import urlparse

from dotenv import load_dotenv
from eth_utils import is_address, to_checksum_address

from cow_amm.constants import (
    DEFAULT_HELPER_ARTIFACT,
    GNOSIS_CHAIN_ID,
    GNOSIS_CONSTANT_PRODUCT_HANDLER,
    GNOSIS_DEPLOYMENT_GENESIS,
    MAINNET_CHAIN_ID,
    MAINNET_CONSTANT_PRODUCT_HANDLER,
    MAINNET_DEPLOYMENT_GENESIS,
    UINT256_MAX,
)
from cow_amm.errors import ConfigurationError
from cow_amm.models import Price


@dataclass(frozen=True)
class NetworkConfig:
    """Network specific constants."""

    name: str
    chain_id: int
    constant_product_handler: str
    genesis_block: int


NETWORKS = {
    MAINNET_CHAIN_ID: NetworkConfig(
        "mainnet",
        MAINNET_CHAIN_ID,
        to_checksum_address(MAINNET_CONSTANT_PRODUCT_HANDLER),
        MAINNET_DEPLOYMENT_GENESIS,
    ),
    GNOSIS_CHAIN_ID: NetworkConfig(
        "gnosis",
        GNOSIS_CHAIN_ID,
        to_checksum_address(GNOSIS_CONSTANT_PRODUCT_HANDLER),
        GNOSIS_DEPLOYMENT_GENESIS,
    ),
}


def get_network_config(chain_id: int) -> NetworkConfig:
    """Constants of a network. Unknown networks are a configuration error."""
    if chain_id not in NETWORKS:
        raise ConfigurationError(f"Unsupported chain ID: {chain_id}")
    return NETWORKS[chain_id]


def get_node_url() -> str:
    """
    URL of the node. NODE_URL takes precedence, otherwise a mainnet infura URL is built
    from INFURA_KEY.
    """
    load_dotenv()
    url = getenv("NODE_URL")
    if not url:
        infura_key = getenv("INFURA_KEY")
        if not infura_key:
            raise ConfigurationError(
                "Environment variable `NODE_URL` is not set. Usage: NODE_URL=<URL> ..."
            )
        url = f"https://mainnet.infura.io/v3/{infura_key}"
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigurationError(f"Invalid URL: {url}")
    return url


def parse_address(value: str) -> str:
    """Checksummed address, or a configuration error for malformed input."""
    value = value.strip()
    if not is_address(value):
        raise ConfigurationError(f"Invalid address: {value}")
    return to_checksum_address(value)


def get_amm_addresses() -> list[str]:
    """AMMs to verify, from the comma separated AMM variable."""
    load_dotenv()
    amms = getenv("AMM")
    if not amms:
        raise ConfigurationError(
            "Environment variable `AMM` is not set. Usage: NODE_URL=<URL> AMM=<AMM> ..."
        )
    return [parse_address(amm) for amm in amms.split(",") if amm.strip()]


def _parse_price_part(name: str, value: Optional[str]) -> Optional[int]:
    if value is None or value.strip() == "":
        return None
    try:
        parsed = int(value.strip())
    except ValueError as err:
        raise ConfigurationError(f"Invalid {name}: {value}") from err
    if parsed <= 0:
        raise ConfigurationError(f"Invalid {name}: {value}, must be positive")
    if parsed > UINT256_MAX:
        raise ConfigurationError(f"Invalid {name}: {value}, exceeds uint256")
    return parsed


def parse_price_override(
    numerator: Optional[str], denominator: Optional[str]
) -> Optional[Price]:
    """
    Build a price from optional numerator and denominator strings. Both or none have
    to be given.
    """
    price_numerator = _parse_price_part("price numerator", numerator)
    price_denominator = _parse_price_part("price denominator", denominator)
    if price_numerator is None and price_denominator is None:
        return None
    if price_numerator is None or price_denominator is None:
        raise ConfigurationError(
            "Both PRICE_NUMERATOR and PRICE_DENOMINATOR must be set, or neither"
        )
    return Price(price_numerator, price_denominator)


def get_price_override() -> Optional[Price]:
    """Price supplied through PRICE_NUMERATOR and PRICE_DENOMINATOR."""
    load_dotenv()
    return parse_price_override(getenv("PRICE_NUMERATOR"), getenv("PRICE_DENOMINATOR"))


def load_helper_bytecode(path: str) -> str:
    """
    Deployed bytecode of the ConstantProductHelper from a compiled artifact. Both the
    foundry (`{"deployedBytecode": {"object": ...}}`) and the hardhat
    (`{"deployedBytecode": ...}`) layouts are understood.
    """
    try:
        with open(path, encoding="utf-8") as artifact_file:
            artifact = json.load(artifact_file)
    except (OSError, json.JSONDecodeError) as err:
        raise ConfigurationError(f"Could not read artifact {path}: {err}") from err

    bytecode = artifact.get("deployedBytecode") if isinstance(artifact, dict) else None
    if isinstance(bytecode, dict):
        bytecode = bytecode.get("object")
    if not isinstance(bytecode, str) or len(bytecode.removeprefix("0x")) == 0:
        raise ConfigurationError(f"No deployed bytecode in helper artifact {path}")
    if not bytecode.startswith("0x"):
        bytecode = "0x" + bytecode
    return bytecode


def get_helper_bytecode() -> str:
    """Bytecode of the helper at HELPER_ARTIFACT or the default foundry output path."""
    load_dotenv()
    return load_helper_bytecode(getenv("HELPER_ARTIFACT", DEFAULT_HELPER_ARTIFACT))
