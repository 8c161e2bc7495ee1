"""
Token Deposit - Move an ERC-20 token from L1 to L2 through the standard gateway.

This script deploys a demo ERC-20 (DappToken) on L1, approves its gateway,
deposits part of the supply into L2 and checks both sides of the bridge.

Requirements:
- DEVNET_PRIVKEY: Private key of a funded devnet account
- L1RPC: L1 RPC endpoint (e.g. http://localhost:8545)
- L2RPC: L2 RPC endpoint (e.g. http://localhost:8547)
- ARTIFACTS_DIR: Directory holding the compiled contracts (defaults to ./artifacts)

Usage:
    python -m examples.token_deposit
"""

import logging
import os

from dotenv import load_dotenv
from hexbytes import HexBytes

from arb_bridge import (
    ApproveTokenParams,
    TokenDepositParams,
    approve_token,
    deploy_contract,
    deposit_token,
    get_config,
    get_l1_gateway_address,
    get_l2_erc20_address,
    get_l2_token_contract,
    load_custom_network,
)
from arb_bridge.exceptions import BalanceCheckError
from arb_bridge.utils import arb_log

NETWORK_FILE = os.path.join(os.path.dirname(__file__), "networks", "local_network.json")

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger("arb.example")

# Initial supply minted to the deployer, and the part of it sent to L2
TOKEN_INITIAL_SUPPLY = 1_000_000_000_000_000
TOKEN_DEPOSIT_AMOUNT = 50


def main():
    """Deploy a token on L1 and deposit some of it into L2."""

    arb_log("Deposit token using Arbitrum SDK")

    # Load environment variables from .env file
    load_dotenv()

    l2_network = load_custom_network(os.environ.get("NETWORK_FILE", NETWORK_FILE))
    logger.info(f"L2 network: {l2_network}")

    config = get_config(l2_network)
    l1_w3 = config["l1_w3"]
    l2_w3 = config["l2_w3"]
    account = config["w3account"]

    logger.info("Deploying the test DappToken to L1:")
    l1_dapp_token = deploy_contract(l1_w3, account, "DappToken", TOKEN_INITIAL_SUPPLY)
    erc20_address = l1_dapp_token.address
    logger.info(f"DappToken is deployed to L1 at {erc20_address}")

    # The gateway escrows deposited tokens, so its balance shows the deposit landed
    expected_l1_gateway_address = get_l1_gateway_address(config, erc20_address)
    initial_bridge_token_balance = l1_dapp_token.functions.balanceOf(expected_l1_gateway_address).call()

    logger.info("Approving:")
    approve_result = approve_token(config, ApproveTokenParams(erc20_l1_address=erc20_address))
    logger.info(
        "You successfully allowed the Arbitrum Bridge to spend DappToken "
        f"{HexBytes(approve_result['transaction_receipt']['transactionHash']).to_0x_hex()}"
    )

    logger.info("Transferring DappToken to L2:")
    result = deposit_token(config, TokenDepositParams(erc20_l1_address=erc20_address, amount=TOKEN_DEPOSIT_AMOUNT))
    deposit_receipt = result["transaction_receipt"]

    logger.info("Now we wait for L2 side of the transaction to be executed")
    l2_result = deposit_receipt.wait_for_l2(l2_w3)

    if l2_result.complete:
        logger.info(f"L2 message successful: status: {l2_result.status.name}")
    else:
        logger.info(f"L2 message failed: status {l2_result.status.name}")

    final_bridge_token_balance = l1_dapp_token.functions.balanceOf(expected_l1_gateway_address).call()
    if initial_bridge_token_balance + TOKEN_DEPOSIT_AMOUNT != final_bridge_token_balance:
        raise BalanceCheckError("Bridge balance not updated after L1 token deposit txn")

    l2_token_address = get_l2_erc20_address(config, erc20_address)
    l2_token = get_l2_token_contract(config, l2_token_address)
    test_wallet_l2_balance = l2_token.functions.balanceOf(account.address).call()
    if test_wallet_l2_balance != TOKEN_DEPOSIT_AMOUNT:
        raise BalanceCheckError("L2 wallet not updated after deposit")

    logger.info(f"L2 wallet holds {test_wallet_l2_balance} DappToken at {l2_token_address}")


if __name__ == "__main__":
    main()
