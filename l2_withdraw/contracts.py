"""
Contract wrappers for the ERC-20 token and the L2 bridge adapter.

The orchestrator only depends on the TokenCapability and
BridgeAdapterCapability protocols; ERC20Token and BridgeAdapter are the
web3-backed implementations.
"""

from typing import Protocol

from .chain import ChainClient
from .models import PendingTransaction

ERC20_ABI = [
    {
        "constant": True,
        "inputs": [{"name": "account", "type": "address"}],
        "name": "balanceOf",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "constant": True,
        "inputs": [
            {"name": "owner", "type": "address"},
            {"name": "spender", "type": "address"},
        ],
        "name": "allowance",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "constant": False,
        "inputs": [
            {"name": "spender", "type": "address"},
            {"name": "amount", "type": "uint256"},
        ],
        "name": "approve",
        "outputs": [{"name": "", "type": "bool"}],
        "stateMutability": "nonpayable",
        "type": "function",
    },
]

BRIDGE_ADAPTER_ABI = [
    {
        "inputs": [
            {"name": "localToken", "type": "address"},
            {"name": "remoteToken", "type": "address"},
            {"name": "recipient", "type": "address"},
            {"name": "amount", "type": "uint256"},
            {"name": "bridgeSpecificData", "type": "bytes"},
        ],
        "name": "sendERC20",
        "outputs": [{"name": "", "type": "bytes"}],
        "stateMutability": "payable",
        "type": "function",
    },
]


class TokenCapability(Protocol):
    address: str

    def balance_of(self, owner: str) -> int: ...

    def allowance(self, owner: str, spender: str) -> int: ...

    def approve(self, spender: str, amount: int) -> PendingTransaction: ...


class BridgeAdapterCapability(Protocol):
    address: str

    def send_erc20(
        self,
        local_token: str,
        remote_token: str,
        recipient: str,
        amount: int,
        bridge_specific_data: bytes = b"",
    ) -> PendingTransaction: ...


class ERC20Token:
    """ERC-20 token on the client's chain"""

    def __init__(self, client: ChainClient, address: str):
        self.client = client
        self.address = address
        self._contract = client.contract(address, ERC20_ABI)

    def balance_of(self, owner: str) -> int:
        return int(self.client.call(self._contract.functions.balanceOf(owner)))

    def allowance(self, owner: str, spender: str) -> int:
        return int(self.client.call(self._contract.functions.allowance(owner, spender)))

    def approve(self, spender: str, amount: int) -> PendingTransaction:
        return self.client.transact(self._contract.functions.approve(spender, amount), action="approve")

    def __repr__(self) -> str:
        return f"ERC20Token({self.address})"


class BridgeAdapter:
    """
    Bridge adapter contract on the secondary chain.

    ``sendERC20`` pulls ``amount`` of ``local_token`` from the caller (so the
    adapter needs an allowance first) and starts the transfer to
    ``recipient`` on the primary chain.
    """

    def __init__(self, client: ChainClient, address: str):
        self.client = client
        self.address = address
        self._contract = client.contract(address, BRIDGE_ADAPTER_ABI)

    def send_erc20(
        self,
        local_token: str,
        remote_token: str,
        recipient: str,
        amount: int,
        bridge_specific_data: bytes = b"",
    ) -> PendingTransaction:
        """
        Submit a withdrawal.

        Args:
            local_token: Token address on this chain
            remote_token: Token address on the destination chain (may be a placeholder)
            recipient: Receiver on the destination chain
            amount: Amount in token base units
            bridge_specific_data: Opaque, adapter-interpreted payload

        Returns:
            PendingTransaction for the withdrawal
        """
        fn = self._contract.functions.sendERC20(
            local_token, remote_token, recipient, amount, bridge_specific_data
        )
        return self.client.transact(fn, action="withdraw")

    def __repr__(self) -> str:
        return f"BridgeAdapter({self.address})"
