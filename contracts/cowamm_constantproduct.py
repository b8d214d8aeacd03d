cowamm_constantproduct = [
    {"inputs": [], "name": "CommitOutsideOfSettlement", "type": "error"},
    {"inputs": [], "name": "OrderDoesNotMatchCommitmentHash", "type": "error"},
    {"inputs": [], "name": "OrderDoesNotMatchDefaultTradeableOrder", "type": "error"},
    {
        "inputs": [{"internalType": "string", "name": "", "type": "string"}],
        "name": "OrderNotValid",
        "type": "error",
    },
    {
        "inputs": [{"internalType": "address", "name": "", "type": "address"}],
        "name": "commitment",
        "outputs": [{"internalType": "bytes32", "name": "", "type": "bytes32"}],
        "stateMutability": "view",
        "type": "function",
    },
]
