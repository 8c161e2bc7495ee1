"""
Token Withdraw - Start moving an ERC-20 token from L2 back to L1.

This script deploys a demo ERC-20 (DappToken) on L1, deposits some of it into
L2 and then withdraws part of it through the L2 gateway router. The L1 side
can be claimed from the Outbox once the withdrawal's assertion is confirmed.

Requirements:
- DEVNET_PRIVKEY: Private key of a funded devnet account
- L1RPC: L1 RPC endpoint (e.g. http://localhost:8545)
- L2RPC: L2 RPC endpoint (e.g. http://localhost:8547)
- ARTIFACTS_DIR: Directory holding the compiled contracts (defaults to ./artifacts)

Usage:
    python -m examples.token_withdraw
"""

import logging
import os
from datetime import datetime

from dotenv import load_dotenv

from arb_bridge import (
    ApproveTokenParams,
    TokenDepositParams,
    TokenWithdrawParams,
    approve_token,
    deploy_contract,
    deposit_token,
    get_config,
    get_l2_erc20_address,
    get_l2_token_contract,
    load_custom_network,
    withdraw_token,
)
from arb_bridge.exceptions import BalanceCheckError
from arb_bridge.utils import arb_log

NETWORK_FILE = os.path.join(os.path.dirname(__file__), "networks", "local_network.json")

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger("arb.example")

TOKEN_INITIAL_SUPPLY = 1_000_000_000_000_000
TOKEN_DEPOSIT_AMOUNT = 50
TOKEN_WITHDRAW_AMOUNT = 20


def main():
    """Deposit a token into L2, then withdraw part of it."""

    arb_log("Withdraw token using Arbitrum SDK")

    # Load environment variables from .env file
    load_dotenv()

    l2_network = load_custom_network(os.environ.get("NETWORK_FILE", NETWORK_FILE))
    logger.info(f"L2 network: {l2_network}")

    config = get_config(l2_network)
    l1_w3 = config["l1_w3"]
    l2_w3 = config["l2_w3"]
    account = config["w3account"]

    # Setup: get some DappToken onto L2 first
    logger.info("Deploying the test DappToken to L1:")
    l1_dapp_token = deploy_contract(l1_w3, account, "DappToken", TOKEN_INITIAL_SUPPLY)
    erc20_address = l1_dapp_token.address
    logger.info(f"DappToken is deployed to L1 at {erc20_address}")

    logger.info("Approving:")
    approve_token(config, ApproveTokenParams(erc20_l1_address=erc20_address))

    logger.info("Transferring DappToken to L2:")
    result = deposit_token(config, TokenDepositParams(erc20_l1_address=erc20_address, amount=TOKEN_DEPOSIT_AMOUNT))
    logger.info(
        "Deposit initiated: waiting for L2 retryable "
        f"(takes < 10 minutes; current time: {datetime.now().strftime('%H:%M:%S')})"
    )
    l2_result = result["transaction_receipt"].wait_for_l2(l2_w3)
    logger.info("Setup complete")

    if l2_result.complete:
        logger.info(f"L2 message successful: status: {l2_result.status.name}")
    else:
        logger.info(f"L2 message failed: status {l2_result.status.name}")

    logger.info("Withdrawing:")
    withdraw_result = withdraw_token(
        config, TokenWithdrawParams(erc20_l1_address=erc20_address, amount=TOKEN_WITHDRAW_AMOUNT)
    )
    logger.info(f"Token withdrawal initiated! {withdraw_result['transaction_receipt'].transaction_hash.to_0x_hex()}")

    l2_token = get_l2_token_contract(config, get_l2_erc20_address(config, erc20_address))
    l2_wallet_balance = l2_token.functions.balanceOf(account.address).call()
    if l2_wallet_balance + TOKEN_WITHDRAW_AMOUNT != TOKEN_DEPOSIT_AMOUNT:
        raise BalanceCheckError("Token withdraw balance not deducted")

    logger.info("To claim funds (after the dispute period), execute the message on the L1 Outbox")


if __name__ == "__main__":
    main()
