"""
Transaction confirmer - blocks until a broadcast transaction is mined.
"""

import logging
import threading
import time
from typing import Any, Mapping, Optional

from web3 import Web3
from web3.exceptions import TransactionNotFound, Web3Exception

from .exceptions import (
    ConfirmationCancelledError,
    ConfirmationError,
    ConfirmationTimeoutError,
    TransactionRevertedError,
)
from .explorer import explorer_link
from .models import PendingTransaction

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 1.0
DEFAULT_TIMEOUT = 300.0


class TransactionConfirmer:
    """
    Polls one chain for transaction receipts.

    A transaction counts as confirmed once its receipt exists, its status is
    successful and the chain head is ``confirmations - 1`` blocks past the
    receipt's block. The wait ends early when the ``cancel`` event passed to
    :meth:`confirm` is set.

    Example:
        confirmer = TransactionConfirmer(web3, chain_id=10, confirmations=3)
        receipt = confirmer.confirm(pending, cancel=stop_event)
    """

    def __init__(
        self,
        web3: Web3,
        chain_id: int,
        confirmations: int = 1,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
    ):
        """
        Args:
            web3: Connected Web3 instance for ``chain_id``
            chain_id: Chain this confirmer watches
            confirmations: Required block depth (1 = included)
            poll_interval: Seconds between receipt polls
            timeout: Seconds before giving up, None to wait until cancelled
        """
        if confirmations < 1:
            raise ValueError("confirmations must be at least 1")
        if poll_interval <= 0:
            raise ValueError("poll_interval must be positive")
        self.web3 = web3
        self.chain_id = chain_id
        self.confirmations = confirmations
        self.poll_interval = poll_interval
        self.timeout = timeout

    def confirm(
        self,
        pending: PendingTransaction,
        cancel: Optional[threading.Event] = None,
    ) -> Mapping[str, Any]:
        """
        Wait for a transaction to be mined and confirmed.

        Args:
            pending: Transaction returned by a submission
            cancel: Event that aborts the wait when set

        Returns:
            The transaction receipt

        Raises:
            TransactionRevertedError: receipt status is 0
            ConfirmationTimeoutError: timeout elapsed
            ConfirmationCancelledError: ``cancel`` was set
            ConfirmationError: wrong chain or the node failed
        """
        tx_hash = pending.tx_hash
        if pending.chain_id != self.chain_id:
            raise ConfirmationError(
                f"TX {tx_hash} is on chain {pending.chain_id}, confirmer watches chain {self.chain_id}",
                tx_hash=tx_hash,
            )

        logger.info("Waiting for TX %s", explorer_link(self.chain_id, tx_hash))
        deadline = time.monotonic() + self.timeout if self.timeout is not None else None

        while True:
            if cancel is not None and cancel.is_set():
                raise ConfirmationCancelledError(f"wait for TX {tx_hash} cancelled", tx_hash=tx_hash)

            receipt = self._get_receipt(tx_hash)
            if receipt is not None:
                if receipt.get("status") == 0:
                    raise TransactionRevertedError(f"TX {tx_hash} reverted", tx_hash=tx_hash)
                if self._depth(receipt, tx_hash) >= self.confirmations:
                    logger.info(
                        "TX %s mined. Block number: %s, gas used: %s",
                        tx_hash,
                        receipt.get("blockNumber"),
                        receipt.get("gasUsed"),
                    )
                    return receipt

            wait = self.poll_interval
            if deadline is not None:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    raise ConfirmationTimeoutError(
                        f"TX {tx_hash} not confirmed after {self.timeout}s", tx_hash=tx_hash
                    )
                wait = min(wait, remaining)

            if cancel is not None:
                if cancel.wait(wait):
                    raise ConfirmationCancelledError(f"wait for TX {tx_hash} cancelled", tx_hash=tx_hash)
            else:
                time.sleep(wait)

    def _get_receipt(self, tx_hash: str) -> Optional[Mapping[str, Any]]:
        try:
            return self.web3.eth.get_transaction_receipt(tx_hash)
        except TransactionNotFound:
            return None
        except (Web3Exception, ValueError, OSError) as e:
            raise ConfirmationError(f"failed to fetch receipt for TX {tx_hash}: {e}", tx_hash=tx_hash) from e

    def _depth(self, receipt: Mapping[str, Any], tx_hash: str) -> int:
        if self.confirmations == 1:
            return 1
        try:
            head = int(self.web3.eth.block_number)
        except (Web3Exception, ValueError, OSError) as e:
            raise ConfirmationError(f"failed to fetch block number: {e}", tx_hash=tx_hash) from e
        return head - int(receipt["blockNumber"]) + 1
