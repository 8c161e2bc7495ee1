"""
ETH Deposit - Move ETH from L1 to the same address on L2.

This script deposits ETH through the Inbox of a local Nitro devnet and waits
until the deposit is credited on L2.

Requirements:
- DEVNET_PRIVKEY: Private key of a funded devnet account
- L1RPC: L1 RPC endpoint (e.g. http://localhost:8545)
- L2RPC: L2 RPC endpoint (e.g. http://localhost:8547)

Usage:
    python -m examples.eth_deposit
"""

import logging
import os

from dotenv import load_dotenv
from web3 import Web3

from arb_bridge import EthDepositParams, deposit_eth, get_config, load_custom_network
from arb_bridge.utils import arb_log

NETWORK_FILE = os.path.join(os.path.dirname(__file__), "networks", "local_network.json")

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger("arb.example")


def main():
    """Deposit ETH into L2 and wait for it to arrive."""

    arb_log("Deposit Eth via Arbitrum SDK")

    # Load environment variables from .env file
    load_dotenv()

    l2_network = load_custom_network(os.environ.get("NETWORK_FILE", NETWORK_FILE))
    logger.info(f"L2 network: {l2_network}")

    config = get_config(l2_network)
    l2_w3 = config["l2_w3"]
    account = config["w3account"]

    # Amount to deposit, in wei
    eth_to_l2_deposit_amount = Web3.to_wei(10, "ether")

    l2_wallet_initial_eth_balance = l2_w3.eth.get_balance(account.address)

    result = deposit_eth(config, EthDepositParams(amount=eth_to_l2_deposit_amount))
    deposit_receipt = result["transaction_receipt"]
    logger.info(f"Deposit L1 receipt is: {deposit_receipt.transaction_hash.to_0x_hex()}")

    # The sequencer picks up the deposit from the delayed inbox, usually within minutes
    logger.info("Now we wait for L2 side of the transaction to be executed")
    l2_result = deposit_receipt.wait_for_l2(l2_w3)

    if l2_result.complete:
        logger.info(f"L2 message successful: status: {l2_result.status.name}")
    else:
        logger.info(f"L2 message failed: status {l2_result.status.name}")

    l2_wallet_updated_eth_balance = l2_w3.eth.get_balance(account.address)
    logger.info(
        f"Your L2 ETH balance is updated from {l2_wallet_initial_eth_balance} to {l2_wallet_updated_eth_balance}"
    )


if __name__ == "__main__":
    main()
