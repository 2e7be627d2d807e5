"""
Chain client - a web3 connection plus the account that signs for it.

One ChainClient is bound to exactly one chain. The orchestrator receives an
already-resolved client instead of looking chains up itself.
"""

import logging
from typing import Any, Dict, Optional

from eth_account.signers.local import LocalAccount
from web3 import Web3
from web3.exceptions import Web3Exception

from .exceptions import ChainQueryError, SubmissionError
from .explorer import explorer_link
from .models import PendingTransaction

logger = logging.getLogger(__name__)


class ChainClient:
    """
    Read and write access to one chain for one account.

    Example:
        client = ChainClient(Web3(HTTPProvider(rpc_url)), Account.from_key(key))
        token = client.web3.eth.contract(address=..., abi=ERC20_ABI)
        balance = client.call(token.functions.balanceOf(client.address))
    """

    def __init__(
        self,
        web3: Web3,
        account: LocalAccount,
        chain_id: Optional[int] = None,
    ):
        """
        Args:
            web3: Connected Web3 instance
            account: Local signing account
            chain_id: Chain id; read from the node when omitted
        """
        self.web3 = web3
        self.account = account
        self._chain_id = chain_id

    @property
    def address(self) -> str:
        return self.account.address

    @property
    def chain_id(self) -> int:
        if self._chain_id is None:
            self._chain_id = int(self.web3.eth.chain_id)
        return self._chain_id

    def contract(self, address: str, abi: list):
        return self.web3.eth.contract(address=Web3.to_checksum_address(address), abi=abi)

    def call(self, contract_function) -> Any:
        """
        Run a read-only contract call from this account.

        Raises:
            ChainQueryError: the node rejected or failed the call
        """
        try:
            return contract_function.call({"from": self.address})
        except (Web3Exception, ValueError, OSError) as e:
            name = getattr(contract_function, "fn_name", "call")
            raise ChainQueryError(f"{name} failed on chain {self._chain_id}: {e}") from e

    def transact(self, contract_function, action: str, value: int = 0) -> PendingTransaction:
        """
        Build, sign and broadcast a contract transaction.

        The nonce is taken from the pending block, so transactions sent one
        after another from the same client are ordered.

        Args:
            contract_function: Bound contract function (e.g. ``token.functions.approve(a, n)``)
            action: Short name used in logs and errors
            value: Native value to attach, in wei

        Returns:
            PendingTransaction for the broadcast transaction

        Raises:
            SubmissionError: building, signing or broadcasting failed
        """
        try:
            nonce = self.web3.eth.get_transaction_count(self.address, "pending")
            params: Dict[str, Any] = {
                "from": self.address,
                "nonce": nonce,
                "chainId": self.chain_id,
            }
            if value:
                params["value"] = value
            tx = contract_function.build_transaction(params)
            signed = self.account.sign_transaction(tx)
            tx_hash = self.web3.eth.send_raw_transaction(signed.raw_transaction)
        except (Web3Exception, ValueError, OSError) as e:
            raise SubmissionError(f"{action} submission failed on chain {self._chain_id}: {e}") from e

        pending = PendingTransaction(chain_id=self.chain_id, tx_hash=Web3.to_hex(tx_hash))
        logger.info("Executing TX %s %s (nonce %s)", action, explorer_link(pending.chain_id, pending.tx_hash), nonce)
        return pending

    def __repr__(self) -> str:
        return f"ChainClient(chain_id={self._chain_id}, address={self.address})"
