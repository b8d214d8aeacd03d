constant_product_helper = [
    {"inputs": [], "name": "PoolDoesNotExist", "type": "error"},
    {"inputs": [], "name": "PoolIsClosed", "type": "error"},
    {
        "inputs": [{"internalType": "address", "name": "amm", "type": "address"}],
        "name": "getSnapshot",
        "outputs": [{"internalType": "bytes", "name": "", "type": "bytes"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [
            {"internalType": "address", "name": "pool", "type": "address"},
            {"internalType": "uint256[]", "name": "prices", "type": "uint256[]"},
        ],
        "name": "order",
        "outputs": [
            {
                "components": [
                    {
                        "internalType": "contract IERC20",
                        "name": "sellToken",
                        "type": "address",
                    },
                    {
                        "internalType": "contract IERC20",
                        "name": "buyToken",
                        "type": "address",
                    },
                    {"internalType": "address", "name": "receiver", "type": "address"},
                    {
                        "internalType": "uint256",
                        "name": "sellAmount",
                        "type": "uint256",
                    },
                    {"internalType": "uint256", "name": "buyAmount", "type": "uint256"},
                    {"internalType": "uint32", "name": "validTo", "type": "uint32"},
                    {"internalType": "bytes32", "name": "appData", "type": "bytes32"},
                    {"internalType": "uint256", "name": "feeAmount", "type": "uint256"},
                    {"internalType": "bytes32", "name": "kind", "type": "bytes32"},
                    {
                        "internalType": "bool",
                        "name": "partiallyFillable",
                        "type": "bool",
                    },
                    {
                        "internalType": "bytes32",
                        "name": "sellTokenBalance",
                        "type": "bytes32",
                    },
                    {
                        "internalType": "bytes32",
                        "name": "buyTokenBalance",
                        "type": "bytes32",
                    },
                ],
                "internalType": "struct GPv2Order.Data",
                "name": "order",
                "type": "tuple",
            },
            {
                "components": [
                    {"internalType": "address", "name": "target", "type": "address"},
                    {"internalType": "uint256", "name": "value", "type": "uint256"},
                    {"internalType": "bytes", "name": "callData", "type": "bytes"},
                ],
                "internalType": "struct GPv2Interaction.Data[]",
                "name": "preInteractions",
                "type": "tuple[]",
            },
            {
                "components": [
                    {"internalType": "address", "name": "target", "type": "address"},
                    {"internalType": "uint256", "name": "value", "type": "uint256"},
                    {"internalType": "bytes", "name": "callData", "type": "bytes"},
                ],
                "internalType": "struct GPv2Interaction.Data[]",
                "name": "postInteractions",
                "type": "tuple[]",
            },
            {"internalType": "bytes", "name": "sig", "type": "bytes"},
        ],
        "stateMutability": "view",
        "type": "function",
    },
]
