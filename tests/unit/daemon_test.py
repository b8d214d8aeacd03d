"""
Tests for the error handling of the daemon.
"""

import unittest
from unittest.mock import MagicMock, call, patch

from cow_amm import daemon
from cow_amm.daemon import verify_amms
from cow_amm.errors import ConfigurationError
from cow_amm.verifier.hint_verification import HintVerificationCheck


class StopLoop(Exception):
    pass


class TestVerifyAmms(unittest.TestCase):
    def test_configuration_error_skips_only_that_amm(self) -> None:
        check = MagicMock(spec=HintVerificationCheck)
        check.run.side_effect = [True, ConfigurationError("no price"), False]
        logger = MagicMock()

        verify_amms(check, ["0x1", "0x2", "0x3"], logger)

        self.assertEqual(
            [c.args[0] for c in check.run.call_args_list], ["0x1", "0x2", "0x3"]
        )
        logger.error.assert_called_once_with("AMM 0x2 skipped: no price")

    def test_unexpected_error_skips_only_that_amm(self) -> None:
        check = MagicMock(spec=HintVerificationCheck)
        # e.g. posting the alert to slack failed
        check.run.side_effect = [RuntimeError("slack unavailable"), True]
        logger = MagicMock()

        verify_amms(check, ["0x1", "0x2"], logger)

        self.assertEqual(check.run.call_count, 2)
        logger.warning.assert_called_once()
        self.assertIn("slack unavailable", logger.warning.call_args[0][0])


@patch("cow_amm.daemon.get_logger")
@patch("cow_amm.daemon.get_price_override", return_value=None)
@patch("cow_amm.daemon.get_helper_bytecode", return_value="0x6080")
@patch("cow_amm.daemon.HelperAPI")
@patch("cow_amm.daemon.HintVerificationCheck")
@patch("cow_amm.daemon.Web3API")
@patch("cow_amm.daemon.Discoverer")
@patch("cow_amm.daemon.time.sleep")
class TestMainLoop(unittest.TestCase):
    def test_scan_errors_do_not_stop_the_daemon(
        self, sleep, discoverer_class, *_
    ) -> None:
        discoverer = discoverer_class.return_value
        discoverer.last_scanned_block = 100
        discoverer.scan.side_effect = [
            ConnectionError("node unavailable"),
            ValueError("bad response"),
            {},
        ]
        discoverer.filter_open.return_value = {}
        sleep.side_effect = [None, None, StopLoop()]

        with self.assertRaises(StopLoop):
            daemon.main()

        self.assertEqual(discoverer.scan.call_args_list, [call(), call(101), call(101)])


if __name__ == "__main__":
    unittest.main()
