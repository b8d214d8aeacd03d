"""
Conversion between the on-chain and off-chain encoding of GPv2 orders and the EIP-712
hashing of orders.
"""

from eth_abi import encode
from eth_utils import keccak

from cow_amm.constants import (
    BALANCE_ERC20,
    BALANCE_EXTERNAL,
    BALANCE_INTERNAL,
    DOMAIN_NAME,
    DOMAIN_TYPE,
    DOMAIN_VERSION,
    KIND_BUY,
    KIND_SELL,
    ORDER_TYPE,
)
from cow_amm.errors import UnknownEncoding
from cow_amm.models import OnchainOrder, Order

DOMAIN_TYPE_HASH = keccak(text=DOMAIN_TYPE)
ORDER_TYPE_HASH = keccak(text=ORDER_TYPE)

KINDS = {KIND_SELL: "sell", KIND_BUY: "buy"}
BALANCES = {
    BALANCE_ERC20: "erc20",
    BALANCE_EXTERNAL: "external",
    BALANCE_INTERNAL: "internal",
}


def to_onchain(order: Order) -> OnchainOrder:
    """Hash the string fields of an order."""
    return OnchainOrder(
        order.sell_token,
        order.buy_token,
        order.receiver,
        order.sell_amount,
        order.buy_amount,
        order.valid_to,
        order.app_data,
        order.fee_amount,
        keccak(text=order.kind),
        order.partially_fillable,
        keccak(text=order.sell_token_balance),
        keccak(text=order.buy_token_balance),
    )


def _lookup(hashes: dict[bytes, str], value: bytes, field_name: str) -> str:
    try:
        return hashes[bytes(value)]
    except KeyError as err:
        raise UnknownEncoding(f"Invalid {field_name}: 0x{bytes(value).hex()}") from err


def from_onchain(order: OnchainOrder) -> Order:
    """
    Recover the string fields of an order. Raises UnknownEncoding if a hash is not
    one of the canonical constants.
    """
    return Order(
        order.sell_token,
        order.buy_token,
        order.receiver,
        order.sell_amount,
        order.buy_amount,
        order.valid_to,
        order.app_data,
        order.fee_amount,
        _lookup(KINDS, order.kind, "order kind"),
        order.partially_fillable,
        _lookup(BALANCES, order.sell_token_balance, "sell token balance"),
        _lookup(BALANCES, order.buy_token_balance, "buy token balance"),
    )


def domain_separator(chain_id: int, verifying_contract: str) -> bytes:
    """EIP-712 domain separator of the settlement contract."""
    return keccak(
        encode(
            ["bytes32", "bytes32", "bytes32", "uint256", "address"],
            [
                DOMAIN_TYPE_HASH,
                keccak(text=DOMAIN_NAME),
                keccak(text=DOMAIN_VERSION),
                chain_id,
                verifying_contract,
            ],
        )
    )


def order_struct_hash(order: OnchainOrder) -> bytes:
    """
    EIP-712 struct hash. Strings are hashed in the typed data encoding, so the on-chain
    order can be encoded as is.
    """
    return keccak(
        encode(
            [
                "bytes32",
                "address",
                "address",
                "address",
                "uint256",
                "uint256",
                "uint32",
                "bytes32",
                "uint256",
                "bytes32",
                "bool",
                "bytes32",
                "bytes32",
            ],
            [ORDER_TYPE_HASH, *order.as_tuple()],
        )
    )


def signing_digest(order: OnchainOrder, chain_id: int, settlement: str) -> bytes:
    """Message passed to `isValidSignature` during settlement."""
    return keccak(
        b"\x19\x01" + domain_separator(chain_id, settlement) + order_struct_hash(order)
    )
