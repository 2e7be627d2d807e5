"""
Value types passed between the withdrawal orchestrator, the contract wrappers
and the confirmer. All of them are immutable.
"""

from dataclasses import dataclass, field
from typing import Optional

from web3 import Web3

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


def to_address(value: str, name: str = "address") -> str:
    """
    Validate a hex address and return its checksum form.

    Args:
        value: Address string (any case)
        name: Field name used in the error message

    Returns:
        EIP-55 checksum address
    """
    if not isinstance(value, str) or not Web3.is_address(value):
        raise ValueError(f"invalid {name}: {value!r}")
    return Web3.to_checksum_address(value)


@dataclass(frozen=True)
class TokenRef:
    """Fungible token on a given chain"""
    chain_id: int
    address: str

    def __post_init__(self):
        object.__setattr__(self, "address", to_address(self.address, "token address"))


@dataclass(frozen=True)
class BridgeAdapterRef:
    """Bridge adapter contract on the secondary chain"""
    chain_id: int
    address: str

    def __post_init__(self):
        object.__setattr__(self, "address", to_address(self.address, "adapter address"))


@dataclass(frozen=True)
class PendingTransaction:
    """A broadcast transaction waiting for confirmation"""
    chain_id: int
    tx_hash: str


@dataclass(frozen=True)
class WithdrawalRequest:
    """
    Everything needed to withdraw a token from L2 to L1.

    The same ``amount`` is used for the balance check, the approval, the
    allowance check and the withdrawal itself.

    Example:
        request = WithdrawalRequest(
            l2_chain_id=10,
            adapter=BridgeAdapterRef(10, "0x..."),
            amount=10**18,
            recipient="0x...",
            token=TokenRef(10, "0x..."),
        )
    """
    l2_chain_id: int
    adapter: BridgeAdapterRef
    amount: int
    recipient: str
    token: TokenRef
    remote_token: str = ZERO_ADDRESS  # not needed by the Optimism L2 adapter
    extension_data: bytes = field(default=b"", repr=False)

    def __post_init__(self):
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise TypeError(f"amount must be an int in token base units, got {type(self.amount).__name__}")
        if self.amount < 0:
            raise ValueError(f"amount must be non-negative, got {self.amount}")
        if self.token.chain_id != self.l2_chain_id:
            raise ValueError(f"token is on chain {self.token.chain_id}, expected {self.l2_chain_id}")
        if self.adapter.chain_id != self.l2_chain_id:
            raise ValueError(f"adapter is on chain {self.adapter.chain_id}, expected {self.l2_chain_id}")
        if not isinstance(self.extension_data, (bytes, bytearray)):
            raise TypeError("extension_data must be bytes")
        object.__setattr__(self, "recipient", to_address(self.recipient, "recipient"))
        object.__setattr__(self, "remote_token", to_address(self.remote_token, "remote token"))
        object.__setattr__(self, "extension_data", bytes(self.extension_data))


@dataclass(frozen=True)
class WithdrawalResult:
    """Outcome of a completed withdrawal"""
    request: WithdrawalRequest
    approve_tx: PendingTransaction
    withdraw_tx: PendingTransaction
    block_number: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "chain_id": self.request.l2_chain_id,
            "token": self.request.token.address,
            "adapter": self.request.adapter.address,
            "recipient": self.request.recipient,
            "amount": str(self.request.amount),
            "approve_tx": self.approve_tx.tx_hash,
            "withdraw_tx": self.withdraw_tx.tx_hash,
            "block_number": self.block_number,
        }
