composable_cow = [
    {
        "anonymous": False,
        "inputs": [
            {
                "indexed": True,
                "internalType": "address",
                "name": "owner",
                "type": "address",
            },
            {
                "components": [
                    {
                        "internalType": "contract IConditionalOrder",
                        "name": "handler",
                        "type": "address",
                    },
                    {"internalType": "bytes32", "name": "salt", "type": "bytes32"},
                    {"internalType": "bytes", "name": "staticInput", "type": "bytes"},
                ],
                "indexed": False,
                "internalType": "struct IConditionalOrder.ConditionalOrderParams",
                "name": "params",
                "type": "tuple",
            },
        ],
        "name": "ConditionalOrderCreated",
        "type": "event",
    },
    {
        "inputs": [
            {"internalType": "address", "name": "", "type": "address"},
            {"internalType": "bytes32", "name": "", "type": "bytes32"},
        ],
        "name": "singleOrders",
        "outputs": [{"internalType": "bool", "name": "", "type": "bool"}],
        "stateMutability": "view",
        "type": "function",
    },
]
