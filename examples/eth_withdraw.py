"""
ETH Withdraw - Start moving ETH from L2 back to L1.

This script initiates an ETH withdrawal through ArbSys on a local Nitro
devnet. Once the withdrawal's assertion is confirmed on L1, the funds can be
claimed from the Outbox.

Requirements:
- DEVNET_PRIVKEY: Private key of an account funded on L2
- L1RPC: L1 RPC endpoint (e.g. http://localhost:8545)
- L2RPC: L2 RPC endpoint (e.g. http://localhost:8547)

Usage:
    python -m examples.eth_withdraw
"""

import logging
import os
import sys

from dotenv import load_dotenv
from web3 import Web3

from arb_bridge import EthWithdrawParams, get_config, load_custom_network, withdraw_eth
from arb_bridge.utils import arb_log

NETWORK_FILE = os.path.join(os.path.dirname(__file__), "networks", "local_network.json")

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger("arb.example")


def main():
    """Withdraw ETH from L2 and show the resulting L2-to-L1 message."""

    arb_log("Withdraw Eth via Arbitrum SDK")

    # Load environment variables from .env file
    load_dotenv()

    l2_network = load_custom_network(os.environ.get("NETWORK_FILE", NETWORK_FILE))
    logger.info(f"L2 network: {l2_network}")

    config = get_config(l2_network)
    l2_w3 = config["l2_w3"]
    account = config["w3account"]

    # Amount to withdraw, in wei
    eth_from_l2_withdraw_amount = Web3.to_wei(1, "ether")

    l2_wallet_initial_eth_balance = l2_w3.eth.get_balance(account.address)
    if l2_wallet_initial_eth_balance < eth_from_l2_withdraw_amount:
        logger.error(
            f"Not enough ether; fund your L2 wallet {account.address} with at least "
            f"{Web3.from_wei(eth_from_l2_withdraw_amount, 'ether')} ether"
        )
        sys.exit(1)

    logger.info("Wallet properly funded: initiating withdrawal now")

    result = withdraw_eth(config, EthWithdrawParams(amount=eth_from_l2_withdraw_amount))
    withdraw_receipt = result["transaction_receipt"]
    logger.info(f"Ether withdrawal initiated! {withdraw_receipt.transaction_hash.to_0x_hex()}")

    for event in withdraw_receipt.get_l2_to_l1_events():
        logger.info(f"Withdrawal data: {event}")

    logger.info("To claim funds (after the dispute period), execute the message on the L1 Outbox")


if __name__ == "__main__":
    main()
