"""
Lists all open constant product AMMs of the connected network.

Usage: NODE_URL=<URL> cow-amm-indexer
"""
# pylint: disable=logging-fstring-interpolation

import sys

from cow_amm.apis.web3api import Web3API
from cow_amm.discovery import Discoverer, format_registration
from cow_amm.errors import ConfigurationError
from cow_amm.helper_functions import get_logger


def main() -> None:
    """
    Scan for AMMs, drop the ones that are no longer open and print the rest.
    """
    logger = get_logger()
    try:
        web3_api = Web3API()
        network = web3_api.get_network()
    except ConfigurationError as err:
        logger.error(str(err))
        sys.exit(1)
    logger.info(f"Chain ID: {network.chain_id} ({network.name})")

    discoverer = Discoverer(web3_api, network)
    amms = discoverer.filter_open(discoverer.scan())

    logger.info(f"Total open AMMs: {len(amms)}")
    logger.info(
        "AMMs are printed as <AMM Address>,<AMM Bytes Params>. The params are ABI "
        "encoded. No guarantee is made that AMMs are listed in the order they were "
        "created."
    )
    for registration in amms.values():
        print(format_registration(registration))


if __name__ == "__main__":
    main()
