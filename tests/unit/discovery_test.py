"""
Tests for the discovery of AMMs.
"""

import unittest
from typing import Any
from unittest.mock import MagicMock

from eth_abi import encode
from eth_utils import keccak, to_checksum_address
from hexbytes import HexBytes

from cow_amm.apis.web3api import Web3API
from cow_amm.configuration import NETWORKS
from cow_amm.discovery import (
    CONDITIONAL_ORDER_CREATED_TOPIC,
    Discoverer,
    decode_registration,
    format_registration,
)
from cow_amm.models import ConditionalOrderParams, LegacyTradingParams

NETWORK = NETWORKS[1]
OTHER_HANDLER = to_checksum_address("0x" + "99" * 20)
TOKEN0 = to_checksum_address("0x" + "01" * 20)
TOKEN1 = to_checksum_address("0x" + "02" * 20)
ORACLE = to_checksum_address("0x" + "03" * 20)


def owner(i: int) -> str:
    return to_checksum_address("0x" + f"{i:040x}")


def static_input(min_traded: int = 0) -> bytes:
    return encode(
        ["(address,address,uint256,address,bytes,bytes32)"],
        [(TOKEN0, TOKEN1, min_traded, ORACLE, b"\x01\x02", bytes(32))],
    )


def make_log(
    amm: str, handler: str, block_number: int, min_traded: int = 0
) -> dict[str, Any]:
    params = ConditionalOrderParams(handler, bytes(32), static_input(min_traded))
    return {
        "topics": [
            HexBytes(CONDITIONAL_ORDER_CREATED_TOPIC),
            HexBytes(bytes(12) + bytes.fromhex(amm[2:])),
        ],
        "data": HexBytes(params.abi_encode()),
        "blockNumber": block_number,
    }


def make_web3_api(logs: list[dict[str, Any]], heads: list[int]) -> MagicMock:
    web3_api = MagicMock(spec=Web3API)
    web3_api.get_current_block_number.side_effect = heads
    web3_api.get_logs.side_effect = lambda start, end, topics: [
        log for log in logs if start <= log["blockNumber"] <= end
    ]
    return web3_api


class TestDecoding(unittest.TestCase):
    def test_topic(self) -> None:
        self.assertEqual(
            CONDITIONAL_ORDER_CREATED_TOPIC,
            "0x"
            + keccak(
                text="ConditionalOrderCreated(address,(address,bytes32,bytes))"
            ).hex(),
        )

    def test_decode_registration(self) -> None:
        registration = decode_registration(
            make_log(owner(1), NETWORK.constant_product_handler, 42)
        )
        self.assertEqual(registration.owner, owner(1))
        self.assertEqual(
            registration.params.handler, NETWORK.constant_product_handler
        )
        self.assertEqual(registration.block_number, 42)
        trading_params = LegacyTradingParams.abi_decode(
            registration.params.static_input
        )
        self.assertEqual(trading_params.tokens, (TOKEN0, TOKEN1))
        self.assertEqual(trading_params.price_oracle_data, b"\x01\x02")

    def test_format_registration(self) -> None:
        registration = decode_registration(
            make_log(owner(1), NETWORK.constant_product_handler, 42)
        )
        address, params = format_registration(registration).split(",")
        self.assertEqual(address, owner(1))
        self.assertEqual(
            ConditionalOrderParams.abi_decode(bytes.fromhex(params)),
            registration.params,
        )


class TestScan(unittest.TestCase):
    def test_latest_registration_wins(self) -> None:
        start = NETWORK.genesis_block
        logs = [
            make_log(owner(1), NETWORK.constant_product_handler, start + i, i)
            for i in range(5)
        ]
        discoverer = Discoverer(make_web3_api(logs, [start + 10, start + 10]), NETWORK)
        amms = discoverer.scan()
        self.assertEqual(list(amms), [owner(1)])
        self.assertEqual(amms[owner(1)].block_number, start + 4)
        self.assertEqual(
            LegacyTradingParams.abi_decode(
                amms[owner(1)].params.static_input
            ).min_traded_token0,
            4,
        )

    def test_latest_registration_wins_across_windows(self) -> None:
        start = NETWORK.genesis_block
        logs = [
            make_log(owner(1), NETWORK.constant_product_handler, start, 1),
            make_log(owner(1), NETWORK.constant_product_handler, start + 25, 2),
        ]
        web3_api = make_web3_api(logs, [start + 30] * 5)
        amms = Discoverer(web3_api, NETWORK, window_size=10).scan()
        self.assertEqual(amms[owner(1)].block_number, start + 25)

    def test_other_handlers_are_ignored(self) -> None:
        start = NETWORK.genesis_block
        logs = [
            make_log(owner(1), NETWORK.constant_product_handler, start),
            make_log(owner(2), OTHER_HANDLER, start + 1),
            make_log(owner(3), NETWORK.constant_product_handler, start + 2),
            # a later registration with another handler does not replace the AMM
            make_log(owner(3), OTHER_HANDLER, start + 3),
        ]
        amms = Discoverer(make_web3_api(logs, [start + 5] * 2), NETWORK).scan()
        self.assertEqual(set(amms), {owner(1), owner(3)})
        for registration in amms.values():
            self.assertEqual(
                registration.params.handler, NETWORK.constant_product_handler
            )

    def test_single_window_when_head_is_close(self) -> None:
        start = 1000
        web3_api = make_web3_api([], [start + 500, start + 500])
        discoverer = Discoverer(web3_api, NETWORK, window_size=10_000)
        discoverer.scan(start)
        web3_api.get_logs.assert_called_once()
        self.assertEqual(web3_api.get_logs.call_args[0][:2], (start, start + 500))
        self.assertEqual(discoverer.last_scanned_block, start + 500)

    def test_windows(self) -> None:
        start = 1000
        web3_api = make_web3_api([], [start + 25] * 4)
        Discoverer(web3_api, NETWORK, window_size=10).scan(start)
        self.assertEqual(
            [call[0][:2] for call in web3_api.get_logs.call_args_list],
            [(1000, 1009), (1010, 1019), (1020, 1025)],
        )

    def test_head_advancing_during_scan(self) -> None:
        start = 1000
        web3_api = make_web3_api([], [start + 5, start + 12, start + 12])
        Discoverer(web3_api, NETWORK, window_size=10).scan(start)
        self.assertEqual(
            [call[0][:2] for call in web3_api.get_logs.call_args_list],
            [(1000, 1005), (1006, 1012)],
        )

    def test_head_behind_window_is_caught_up(self) -> None:
        start = 1000
        web3_api = make_web3_api([], [start + 20, start + 3])
        Discoverer(web3_api, NETWORK, window_size=100).scan(start)
        web3_api.get_logs.assert_called_once()

    def test_start_after_head(self) -> None:
        web3_api = make_web3_api([], [10])
        self.assertEqual(Discoverer(web3_api, NETWORK).scan(11), {})
        web3_api.get_logs.assert_not_called()


class TestFilterOpen(unittest.TestCase):
    def setUp(self) -> None:
        start = NETWORK.genesis_block
        logs = [
            make_log(owner(i), NETWORK.constant_product_handler, start + i)
            for i in range(1, 5)
        ]
        web3_api = make_web3_api(logs, [start + 10] * 2)
        self.registrations = Discoverer(web3_api, NETWORK).scan()

    def test_filter_open(self) -> None:
        web3_api = MagicMock(spec=Web3API)

        def is_enabled(amm: str, order_hash: bytes) -> bool:
            self.assertEqual(order_hash, self.registrations[amm].params.order_hash())
            return amm != owner(1)

        def balance(token: str, amm: str) -> int:
            if amm == owner(2) and token == TOKEN1:
                return 0
            if amm == owner(3):
                raise ConnectionError("node unavailable")
            return 100

        web3_api.is_single_order_enabled.side_effect = is_enabled
        web3_api.get_token_balance.side_effect = balance

        amms = Discoverer(web3_api, NETWORK, max_workers=4).filter_open(
            self.registrations
        )
        self.assertEqual(list(amms), [owner(4)])

    def test_empty(self) -> None:
        web3_api = MagicMock(spec=Web3API)
        self.assertEqual(Discoverer(web3_api, NETWORK).filter_open({}), {})


if __name__ == "__main__":
    unittest.main()
