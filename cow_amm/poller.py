"""
Verifies that the AMMs given in AMM can currently settle the order their helper hints at.

Usage: NODE_URL=<URL> AMM=<AMM>[,<AMM>...] [PRICE_NUMERATOR=<n> PRICE_DENOMINATOR=<d>]
       cow-amm-poller
"""
# pylint: disable=logging-fstring-interpolation

import sys

from cow_amm.apis.helperapi import HelperAPI
from cow_amm.apis.web3api import Web3API
from cow_amm.configuration import (
    get_amm_addresses,
    get_helper_bytecode,
    get_price_override,
)
from cow_amm.errors import ConfigurationError
from cow_amm.helper_functions import get_logger
from cow_amm.verifier.hint_verification import HintVerificationCheck


def main() -> None:
    """
    Run the hint verification once for every configured AMM. Exits with status 1 if
    the configuration is invalid or any AMM is rejected.
    """
    logger = get_logger()
    try:
        amms = get_amm_addresses()
        price_override = get_price_override()
        web3_api = Web3API()
        network = web3_api.get_network()
        logger.info(f"Chain ID: {network.chain_id} ({network.name})")
        check = HintVerificationCheck(
            web3_api, HelperAPI(web3_api, get_helper_bytecode()), price_override
        )
        check.add_amms_to_queue(amms)
        results = check.run_queue()
    except ConfigurationError as err:
        logger.error(str(err))
        sys.exit(1)

    failed = [amm for amm, success in results.items() if not success]
    if failed:
        logger.error(f"Verification failed for {len(failed)} AMM(s): {failed}")
        sys.exit(1)
    logger.info(f"Verification succeeded for {len(results)} AMM(s)")


if __name__ == "__main__":
    main()
