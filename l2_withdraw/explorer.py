"""Block explorer links for transaction logging."""

EXPLORERS = {
    1: "https://etherscan.io",
    10: "https://optimistic.etherscan.io",
    137: "https://polygonscan.com",
    8453: "https://basescan.org",
    42161: "https://arbiscan.io",
    84532: "https://sepolia.basescan.org",
    421614: "https://sepolia.arbiscan.io",
    11155111: "https://sepolia.etherscan.io",
    11155420: "https://sepolia-optimism.etherscan.io",
}


def explorer_link(chain_id: int, tx_hash: str) -> str:
    """
    Get a block explorer URL for a transaction.

    Args:
        chain_id: EIP-155 chain id
        tx_hash: 0x-prefixed transaction hash

    Returns:
        Explorer URL, or the bare hash for unknown chains
    """
    base = EXPLORERS.get(chain_id)
    if not base:
        return tx_hash
    return f"{base}/tx/{tx_hash}"
