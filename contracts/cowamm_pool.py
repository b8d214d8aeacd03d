cowamm_pool = [
    {"inputs": [], "name": "CommitOutsideOfSettlement", "type": "error"},
    {"inputs": [], "name": "OrderDoesNotMatchCommitmentHash", "type": "error"},
    {
        "inputs": [{"internalType": "string", "name": "", "type": "string"}],
        "name": "OrderNotValid",
        "type": "error",
    },
    {
        "inputs": [],
        "name": "commitment",
        "outputs": [{"internalType": "bytes32", "name": "value", "type": "bytes32"}],
        "stateMutability": "view",
        "type": "function",
    },
]
