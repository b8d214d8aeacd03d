"""
Tests for order encodings and EIP-712 hashing.
"""

import unittest
from dataclasses import replace

from eth_utils import keccak, to_checksum_address

from cow_amm.constants import (
    BALANCE_ERC20,
    BALANCE_EXTERNAL,
    BALANCE_INTERNAL,
    KIND_BUY,
    KIND_SELL,
    SETTLEMENT_CONTRACT_ADDRESS,
)
from cow_amm.errors import DecodeError, UnknownEncoding
from cow_amm.models import Order
from cow_amm.order import (
    ORDER_TYPE_HASH,
    domain_separator,
    from_onchain,
    order_struct_hash,
    signing_digest,
    to_onchain,
)

SELL_TOKEN = to_checksum_address("0x" + "11" * 20)
BUY_TOKEN = to_checksum_address("0x" + "22" * 20)
RECEIVER = to_checksum_address("0x" + "00" * 20)


def make_order(kind: str, sell_balance: str, buy_balance: str) -> Order:
    return Order(
        SELL_TOKEN,
        BUY_TOKEN,
        RECEIVER,
        10**18,
        2 * 10**18,
        1_700_000_000,
        b"\x01" * 32,
        0,
        kind,
        False,
        sell_balance,
        buy_balance,
    )


class TestOrderEncoding(unittest.TestCase):
    def test_canonical_hashes(self) -> None:
        self.assertEqual(keccak(text="sell"), KIND_SELL)
        self.assertEqual(keccak(text="buy"), KIND_BUY)
        self.assertEqual(keccak(text="erc20"), BALANCE_ERC20)
        self.assertEqual(keccak(text="external"), BALANCE_EXTERNAL)
        self.assertEqual(keccak(text="internal"), BALANCE_INTERNAL)

    def test_round_trip(self) -> None:
        for kind, sell_balance, buy_balance in [
            ("sell", "erc20", "erc20"),
            ("buy", "external", "internal"),
            ("sell", "internal", "external"),
        ]:
            order = make_order(kind, sell_balance, buy_balance)
            onchain = to_onchain(order)
            self.assertEqual(onchain.kind, keccak(text=kind))
            self.assertEqual(from_onchain(onchain), order)

    def test_unknown_kind(self) -> None:
        onchain = replace(
            to_onchain(make_order("sell", "erc20", "erc20")), kind=keccak(text="swap")
        )
        with self.assertRaises(UnknownEncoding):
            from_onchain(onchain)

    def test_unknown_balance(self) -> None:
        onchain = to_onchain(make_order("buy", "erc20", "erc20"))
        with self.assertRaises(UnknownEncoding):
            from_onchain(replace(onchain, sell_token_balance=bytes(32)))
        with self.assertRaises(DecodeError):
            from_onchain(replace(onchain, buy_token_balance=KIND_SELL))


class TestOrderHashing(unittest.TestCase):
    def test_order_type_hash(self) -> None:
        # GPv2Order.TYPE_HASH
        self.assertEqual(
            ORDER_TYPE_HASH.hex(),
            "d5a25ba2e97094ad7d83dc28a6572da797d6b3e7fc6663bd93efb789fc17e489",
        )

    def test_mainnet_domain_separator(self) -> None:
        self.assertEqual(
            domain_separator(1, SETTLEMENT_CONTRACT_ADDRESS).hex(),
            "c078f884a2676e1345748b1feace7b0abee5d00ecadb6e574dcdd109a63e8943",
        )

    def test_digest_depends_on_chain(self) -> None:
        onchain = to_onchain(make_order("sell", "erc20", "erc20"))
        mainnet = signing_digest(onchain, 1, SETTLEMENT_CONTRACT_ADDRESS)
        gnosis = signing_digest(onchain, 100, SETTLEMENT_CONTRACT_ADDRESS)
        self.assertEqual(len(mainnet), 32)
        self.assertNotEqual(mainnet, gnosis)
        self.assertEqual(
            mainnet,
            keccak(
                b"\x19\x01"
                + domain_separator(1, SETTLEMENT_CONTRACT_ADDRESS)
                + order_struct_hash(onchain)
            ),
        )

    def test_digest_depends_on_order(self) -> None:
        onchain = to_onchain(make_order("sell", "erc20", "erc20"))
        self.assertNotEqual(
            order_struct_hash(onchain),
            order_struct_hash(replace(onchain, buy_amount=onchain.buy_amount + 1)),
        )


if __name__ == "__main__":
    unittest.main()
