"""
Guarded L2 -> L1 withdrawal.

Sequence: check balance, approve the adapter, verify the allowance, send the
withdrawal. Each transaction is confirmed before the next step starts and any
failure aborts the whole withdrawal.
"""

import logging
import threading
from typing import Any, Callable, Mapping, Optional, Tuple

from .chain import ChainClient
from .confirm import TransactionConfirmer
from .contracts import BridgeAdapter, BridgeAdapterCapability, ERC20Token, TokenCapability
from .exceptions import (
    ApprovalMismatchError,
    ChainMismatchError,
    ConfirmationCancelledError,
    ConfirmationError,
    InsufficientBalanceError,
    SubmissionError,
    TransactionFailedError,
)
from .models import PendingTransaction, WithdrawalRequest, WithdrawalResult

logger = logging.getLogger(__name__)

TokenFactory = Callable[[ChainClient, str], TokenCapability]
AdapterFactory = Callable[[ChainClient, str], BridgeAdapterCapability]


class WithdrawalOrchestrator:
    """
    Withdraws tokens from the client's chain through a bridge adapter.

    Example:
        client = env.client(10)
        orchestrator = WithdrawalOrchestrator(client, env.confirmer(10))
        result = orchestrator.execute(request)
    """

    def __init__(
        self,
        client: ChainClient,
        confirmer: TransactionConfirmer,
        token_factory: TokenFactory = ERC20Token,
        adapter_factory: AdapterFactory = BridgeAdapter,
    ):
        """
        Args:
            client: Signing client for the secondary chain
            confirmer: Confirmer for the same chain
            token_factory: Builds the token wrapper from (client, address)
            adapter_factory: Builds the adapter wrapper from (client, address)
        """
        self.client = client
        self.confirmer = confirmer
        self.token_factory = token_factory
        self.adapter_factory = adapter_factory

    def execute(
        self,
        request: WithdrawalRequest,
        cancel: Optional[threading.Event] = None,
    ) -> WithdrawalResult:
        """
        Run the withdrawal.

        Args:
            request: What to withdraw and where to
            cancel: Event that aborts the run; checked before each submission
                and during confirmation waits

        Returns:
            WithdrawalResult with both transaction hashes

        Raises:
            ChainMismatchError: request or confirmer is for another chain
            InsufficientBalanceError: balance below the requested amount
            TransactionFailedError: approve or withdraw did not confirm
            ApprovalMismatchError: allowance below the amount after approval
            ChainQueryError: a balance or allowance read failed
        """
        if request.l2_chain_id != self.client.chain_id:
            raise ChainMismatchError(request.l2_chain_id, self.client.chain_id)
        if self.confirmer.chain_id != self.client.chain_id:
            raise ChainMismatchError(
                self.client.chain_id,
                self.confirmer.chain_id,
                f"confirmer watches chain {self.confirmer.chain_id}, client is connected to chain {self.client.chain_id}",
            )

        owner = self.client.address
        amount = request.amount
        token = self.token_factory(self.client, request.token.address)
        adapter = self.adapter_factory(self.client, request.adapter.address)

        balance = token.balance_of(owner)
        logger.info("Balance of %s on chain %s: %s (want %s)", owner, request.l2_chain_id, balance, amount)
        if balance < amount:
            raise InsufficientBalanceError(balance, amount)

        approve_tx, _ = self._submit_and_confirm(
            "approve", lambda: token.approve(request.adapter.address, amount), cancel
        )

        allowance = token.allowance(owner, request.adapter.address)
        if allowance < amount:
            raise ApprovalMismatchError(allowance, amount)

        logger.info("Withdrawing %s of %s to %s", amount, request.token.address, request.recipient)
        withdraw_tx, receipt = self._submit_and_confirm(
            "withdraw",
            lambda: adapter.send_erc20(
                request.token.address,
                request.remote_token,
                request.recipient,
                amount,
                request.extension_data,
            ),
            cancel,
        )
        logger.info("Withdrawal %s confirmed", withdraw_tx.tx_hash)

        return WithdrawalResult(
            request=request,
            approve_tx=approve_tx,
            withdraw_tx=withdraw_tx,
            block_number=receipt.get("blockNumber"),
        )

    def _submit_and_confirm(
        self,
        step: str,
        submit: Callable[[], PendingTransaction],
        cancel: Optional[threading.Event],
    ) -> Tuple[PendingTransaction, Mapping[str, Any]]:
        """Submit one transaction and block until it confirms"""
        if cancel is not None and cancel.is_set():
            cause = ConfirmationCancelledError(f"cancelled before {step} was submitted")
            logger.error("%s step cancelled before submission", step)
            raise TransactionFailedError(step, cause) from cause
        try:
            pending = submit()
            receipt = self.confirmer.confirm(pending, cancel=cancel)
        except (SubmissionError, ConfirmationError) as e:
            logger.error("%s step failed: %s", step, e)
            raise TransactionFailedError(step, e) from e
        return pending, receipt
