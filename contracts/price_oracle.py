price_oracle = [
    {
        "inputs": [
            {"internalType": "address", "name": "token0", "type": "address"},
            {"internalType": "address", "name": "token1", "type": "address"},
            {"internalType": "bytes", "name": "data", "type": "bytes"},
        ],
        "name": "getPrice",
        "outputs": [
            {"internalType": "uint256", "name": "priceNumerator", "type": "uint256"},
            {
                "internalType": "uint256",
                "name": "priceDenominator",
                "type": "uint256",
            },
        ],
        "stateMutability": "view",
        "type": "function",
    },
]
