"""
L2 Withdraw - Guarded token withdrawals from an L2 back to L1.

Usage:
    from l2_withdraw import Environment, WithdrawalOrchestrator, WithdrawalRequest

    env = Environment.from_env()
    orchestrator = WithdrawalOrchestrator(env.client(10), env.confirmer(10))
    result = orchestrator.execute(request)
"""

from .chain import ChainClient
from .confirm import TransactionConfirmer
from .contracts import BridgeAdapter, ERC20Token
from .env import ChainConfig, Environment
from .models import BridgeAdapterRef, PendingTransaction, TokenRef, WithdrawalRequest, WithdrawalResult
from .withdraw import WithdrawalOrchestrator
from .exceptions import (
    WithdrawalError,
    ConfigError,
    ChainMismatchError,
    ChainQueryError,
    SubmissionError,
    InsufficientBalanceError,
    ApprovalMismatchError,
    TransactionFailedError,
    ConfirmationError,
    TransactionRevertedError,
    ConfirmationTimeoutError,
    ConfirmationCancelledError,
)

__version__ = "0.1.0"
__all__ = [
    # Core
    "WithdrawalOrchestrator",
    "TransactionConfirmer",
    "ChainClient",
    "ERC20Token",
    "BridgeAdapter",
    # Config
    "Environment",
    "ChainConfig",
    # Models
    "TokenRef",
    "BridgeAdapterRef",
    "PendingTransaction",
    "WithdrawalRequest",
    "WithdrawalResult",
    # Exceptions
    "WithdrawalError",
    "ConfigError",
    "ChainMismatchError",
    "ChainQueryError",
    "SubmissionError",
    "InsufficientBalanceError",
    "ApprovalMismatchError",
    "TransactionFailedError",
    "ConfirmationError",
    "TransactionRevertedError",
    "ConfirmationTimeoutError",
    "ConfirmationCancelledError",
]
