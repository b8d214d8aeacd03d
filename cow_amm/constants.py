"""
All Constants that are used throughout the project
"""

# daemon loop
SLEEP_TIME_IN_SEC = 12

# number of blocks requested per eth_getLogs call
WINDOW_SIZE = 10_000

# upper bound of concurrent liveness checks
LIVENESS_MAX_WORKERS = 16

# requests
REQUEST_TIMEOUT = 30

# relevant addresses, identical on all supported networks
SETTLEMENT_CONTRACT_ADDRESS = "0x9008D19f58AAbD9eD0D60971565AA8510560ab41"
COMPOSABLE_COW_ADDRESS = "0xfdaFc9d1902f4e0b84f65F49f244b32b31013b74"
MULTICALL3_ADDRESS = "0xcA11bde05977b3631167028862bE2a173976CA11"
# the helper is never deployed, its code is injected with a state override
HELPER_ADDRESS = "0xbeef5afebeef5afebeef5afebeef5afebeef5afe"

# per network constant product handler and the block it was deployed in
MAINNET_CHAIN_ID = 1
MAINNET_CONSTANT_PRODUCT_HANDLER = "0x34323B933096534e43958F6c7Bf44F2Bb59424DA"
MAINNET_DEPLOYMENT_GENESIS = 19277205
GNOSIS_CHAIN_ID = 100
GNOSIS_CONSTANT_PRODUCT_HANDLER = "0xB148F40fff05b5CE6B22752cf8E454B556f7a851"
GNOSIS_DEPLOYMENT_GENESIS = 32478660

# default location of the compiled ConstantProductHelper (foundry layout)
DEFAULT_HELPER_ARTIFACT = "out/ConstantProductHelper.sol/ConstantProductHelper.json"

# simulation
# sub-call failures are reported per entry instead of reverting the batch
REQUIRE_SUCCESS = False
UINT256_MAX = 2**256 - 1
ERC1271_MAGIC_VALUE = bytes.fromhex("1626ba7e")
EMPTY_COMMITMENT = bytes(32)

# EIP-712
DOMAIN_NAME = "Gnosis Protocol"
DOMAIN_VERSION = "v2"
DOMAIN_TYPE = (
    "EIP712Domain(string name,string version,uint256 chainId,address verifyingContract)"
)
ORDER_TYPE = (
    "Order("
    "address sellToken,"
    "address buyToken,"
    "address receiver,"
    "uint256 sellAmount,"
    "uint256 buyAmount,"
    "uint32 validTo,"
    "bytes32 appData,"
    "uint256 feeAmount,"
    "string kind,"
    "bool partiallyFillable,"
    "string sellTokenBalance,"
    "string buyTokenBalance"
    ")"
)

# keccak256 of the canonical GPv2 order kind and balance strings
KIND_SELL = bytes.fromhex(
    "f3b277728b3fee749481eb3e0b3b48980dbbab78658fc419025cb16eee346775"
)
KIND_BUY = bytes.fromhex(
    "6ed88e868af0a1983e3886d5f3e95a2fafbd6c3450bc229e27342283dc429ccc"
)
BALANCE_ERC20 = bytes.fromhex(
    "5a28e9363bb942b639270062aa6bb295f434bcdfc42c97267bf003f272060dc9"
)
BALANCE_EXTERNAL = bytes.fromhex(
    "abee3b73373acd583a130924aad6dc38cfdc44ba0555ba94ce2ff63980ea0632"
)
BALANCE_INTERNAL = bytes.fromhex(
    "4ac99ace14ee0a5ef932dc609df0943ab7ac16b7583634612f8dc35a4289a6ce"
)

# standard solidity revert payloads
ERROR_STRING_SELECTOR = bytes.fromhex("08c379a0")
PANIC_SELECTOR = bytes.fromhex("4e487b71")
