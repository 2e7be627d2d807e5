"""L2 Withdraw Exceptions"""

from typing import Optional


class WithdrawalError(Exception):
    """Base exception for L2 withdrawals"""
    pass


class ConfigError(WithdrawalError):
    """Environment or credentials are missing or invalid"""
    pass


class ChainMismatchError(WithdrawalError):
    """Request targets a different chain than the client"""

    def __init__(self, expected: int, actual: int, message: Optional[str] = None):
        self.expected = expected
        self.actual = actual
        super().__init__(message or f"request is for chain {expected}, client is connected to chain {actual}")


class ChainQueryError(WithdrawalError):
    """A read-only contract call failed"""
    pass


class SubmissionError(WithdrawalError):
    """Building, signing or broadcasting a transaction failed"""
    pass


class InsufficientBalanceError(WithdrawalError):
    """Not enough token balance to withdraw"""

    def __init__(self, balance: int, requested: int):
        self.balance = balance
        self.requested = requested
        super().__init__(
            f"not enough balance to withdraw, get more tokens or specify less amount, "
            f"bal: {balance}, want: {requested}"
        )


class ApprovalMismatchError(WithdrawalError):
    """Allowance after approval is below the requested amount"""

    def __init__(self, allowance: int, requested: int):
        self.allowance = allowance
        self.requested = requested
        super().__init__(f"approval failed, allowance: {allowance}, expected amount: {requested}")


class TransactionFailedError(WithdrawalError):
    """A submitted transaction did not confirm"""

    def __init__(self, step: str, cause: Optional[BaseException] = None):
        self.step = step
        self.cause = cause
        message = f"{step} transaction failed"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)


class ConfirmationError(WithdrawalError):
    """Transaction did not reach a successful terminal state"""

    def __init__(self, message: str, tx_hash: Optional[str] = None):
        self.tx_hash = tx_hash
        super().__init__(message)


class TransactionRevertedError(ConfirmationError):
    """Transaction was mined but reverted"""
    pass


class ConfirmationTimeoutError(ConfirmationError):
    """Gave up waiting for the transaction"""
    pass


class ConfirmationCancelledError(ConfirmationError):
    """Wait was cancelled by the caller"""
    pass
