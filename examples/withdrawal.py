"""
Withdrawal Example - How to withdraw tokens from Optimism back to Ethereum

This example shows how to:
1. Check your token balance on L2
2. Withdraw through the L2 bridge adapter
3. Handle the failure cases

Requirements:
    export L2W_PRIVATE_KEY=0x...
    export L2W_RPC_URL_10=https://mainnet.optimism.io
"""

import logging

from l2_withdraw import (
    BridgeAdapterRef,
    Environment,
    ERC20Token,
    InsufficientBalanceError,
    TokenRef,
    TransactionFailedError,
    WithdrawalOrchestrator,
    WithdrawalRequest,
)

logging.basicConfig(level=logging.INFO)

L2_CHAIN_ID = 10  # OP Mainnet
L2_ADAPTER = "0x..."  # Your OptimismL2BridgeAdapter deployment
L2_TOKEN = "0x4200000000000000000000000000000000000006"  # WETH on OP Mainnet

env = Environment.from_env()
client = env.client(L2_CHAIN_ID)

# Check balance first
balance = ERC20Token(client, L2_TOKEN).balance_of(client.address)
print(f"Available balance: {balance}")

request = WithdrawalRequest(
    l2_chain_id=L2_CHAIN_ID,
    adapter=BridgeAdapterRef(L2_CHAIN_ID, L2_ADAPTER),
    amount=10**16,  # 0.01 WETH
    recipient=client.address,  # Same address on L1
    token=TokenRef(L2_CHAIN_ID, L2_TOKEN),
)

orchestrator = WithdrawalOrchestrator(client, env.confirmer(L2_CHAIN_ID, timeout=600))

try:
    result = orchestrator.execute(request)
    print("Withdrawal submitted!")
    print(f"  Approve TX:  {result.approve_tx.tx_hash}")
    print(f"  Withdraw TX: {result.withdraw_tx.tx_hash}")
    print(f"  Block: {result.block_number}")
except InsufficientBalanceError as e:
    print(f"Insufficient balance: have {e.balance}, want {e.requested}")
except TransactionFailedError as e:
    # The approval may already be mined; check the allowance before retrying
    print(f"{e.step} failed: {e.cause}")

"""
After the withdrawal is mined on L2, the tokens still have to be proven and
finalized on L1 (about 7 days on OP Mainnet). That part is outside this tool.
"""
