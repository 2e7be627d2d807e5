"""Shared fakes for the withdrawal tests."""

import pytest
from web3.exceptions import TransactionNotFound

from l2_withdraw.exceptions import TransactionRevertedError
from l2_withdraw.models import BridgeAdapterRef, PendingTransaction, TokenRef, WithdrawalRequest

CHAIN_ID = 10
OWNER = "0x" + "11" * 20
TOKEN = "0x" + "22" * 20
ADAPTER = "0x" + "33" * 20
RECIPIENT = "0x" + "44" * 20
APPROVE_HASH = "0x" + "a1" * 32
WITHDRAW_HASH = "0x" + "b2" * 32


class FakeClient:
    def __init__(self, chain_id=CHAIN_ID, address=OWNER):
        self.chain_id = chain_id
        self.address = address


class FakeToken:
    """Token that records every call in a shared log"""

    def __init__(self, log, balance, allowance_after_approve=None):
        self.log = log
        self.address = TOKEN
        self.balance = balance
        self.allowance_after_approve = allowance_after_approve
        self.current_allowance = 0

    def balance_of(self, owner):
        self.log.append(("balanceOf", owner))
        return self.balance

    def allowance(self, owner, spender):
        self.log.append(("allowance", owner, spender))
        return self.current_allowance

    def approve(self, spender, amount):
        self.log.append(("approve", spender, amount))
        if self.allowance_after_approve is None:
            self.current_allowance = amount
        else:
            self.current_allowance = self.allowance_after_approve
        return PendingTransaction(CHAIN_ID, APPROVE_HASH)


class FakeAdapter:
    def __init__(self, log, error=None):
        self.log = log
        self.address = ADAPTER
        self.error = error

    def send_erc20(self, local_token, remote_token, recipient, amount, bridge_specific_data=b""):
        self.log.append(("sendERC20", local_token, remote_token, recipient, amount, bridge_specific_data))
        if self.error is not None:
            raise self.error
        return PendingTransaction(CHAIN_ID, WITHDRAW_HASH)


class FakeConfirmer:
    """Confirms everything except the hashes mapped to an error"""

    def __init__(self, log, failures=None, block_number=123, chain_id=CHAIN_ID):
        self.log = log
        self.chain_id = chain_id
        self.failures = failures or {}
        self.block_number = block_number

    def confirm(self, pending, cancel=None):
        self.log.append(("confirm", pending.tx_hash))
        if pending.tx_hash in self.failures:
            raise self.failures[pending.tx_hash]
        return {"status": 1, "blockNumber": self.block_number, "transactionHash": pending.tx_hash}


class FakeEth:
    """Stands in for ``web3.eth``; receipts are served in order and the last one repeats, None = not mined yet"""

    def __init__(self, receipts=(), block_numbers=()):
        self.receipts = list(receipts)
        self.block_numbers = list(block_numbers)
        self.receipt_calls = 0

    def get_transaction_receipt(self, tx_hash):
        self.receipt_calls += 1
        if len(self.receipts) > 1:
            item = self.receipts.pop(0)
        else:
            item = self.receipts[0] if self.receipts else None
        if isinstance(item, Exception):
            raise item
        if item is None:
            raise TransactionNotFound(f"Transaction with hash: {tx_hash} not found.")
        return item

    @property
    def block_number(self):
        if len(self.block_numbers) > 1:
            return self.block_numbers.pop(0)
        return self.block_numbers[0]


class FakeWeb3:
    def __init__(self, eth):
        self.eth = eth


def make_request(amount=50, **overrides):
    fields = dict(
        l2_chain_id=CHAIN_ID,
        adapter=BridgeAdapterRef(CHAIN_ID, ADAPTER),
        amount=amount,
        recipient=RECIPIENT,
        token=TokenRef(CHAIN_ID, TOKEN),
    )
    fields.update(overrides)
    return WithdrawalRequest(**fields)


@pytest.fixture
def call_log():
    return []


@pytest.fixture
def reverted_approve():
    return {APPROVE_HASH: TransactionRevertedError(f"TX {APPROVE_HASH} reverted", tx_hash=APPROVE_HASH)}
