"""
Greeter - Send a message from an L1 contract to an L2 contract.

This script deploys a Greeter pair on a local Nitro devnet (GreeterL1 on L1,
GreeterL2 on L2), links them to each other and then updates the L2 greeting
from L1 through a retryable ticket.

Requirements:
- DEVNET_PRIVKEY: Private key of an account funded on both chains
- L1RPC: L1 RPC endpoint (e.g. http://localhost:8545)
- L2RPC: L2 RPC endpoint (e.g. http://localhost:8547)
- ARTIFACTS_DIR: Directory holding the compiled contracts (defaults to ./artifacts)

Usage:
    python -m examples.greeter
"""

import logging
import os

from dotenv import load_dotenv
from eth_abi import encode
from web3 import Web3

from arb_bridge import L1ToL2MessageGasEstimator, L1ToL2MessageStatus, deploy_contract, get_config, load_custom_network
from arb_bridge.consts import ADDRESS_ZERO
from arb_bridge.message import L1TransactionReceipt
from arb_bridge.utils import arb_log, send_transaction

NETWORK_FILE = os.path.join(os.path.dirname(__file__), "networks", "greeter_local_network.json")

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger("arb.example")

NEW_GREETING = "Greeting from far, far away"

# Extra headroom on top of the estimated submission fee
SUBMISSION_FEE_MULTIPLIER = 5


def main():
    """Deploy both greeters and update the L2 greeting from L1."""

    arb_log("Cross-chain Greeter")

    # Load environment variables from .env file
    load_dotenv()

    l2_network = load_custom_network(os.environ.get("NETWORK_FILE", NETWORK_FILE))
    logger.info(f"L2 network: {l2_network}")

    config = get_config(l2_network)
    l1_w3 = config["l1_w3"]
    l2_w3 = config["l2_w3"]
    account = config["w3account"]
    inbox_address = l2_network.eth_bridge.inbox

    # The L1 greeter sends through the inbox; targets are linked once both exist
    logger.info("Deploying L1 Greeter")
    l1_greeter = deploy_contract(l1_w3, account, "GreeterL1", "Hello world in L1", ADDRESS_ZERO, inbox_address)
    logger.info(f"Deployed to {l1_greeter.address}")

    logger.info("Deploying L2 Greeter")
    l2_greeter = deploy_contract(l2_w3, account, "GreeterL2", "Hello world in L2", ADDRESS_ZERO)
    logger.info(f"Deployed to {l2_greeter.address}")

    send_transaction(l1_w3, account, l1_greeter.functions.updateL2Target(l2_greeter.address))
    send_transaction(l2_w3, account, l2_greeter.functions.updateL1Target(l1_greeter.address))
    logger.info("Counterpart contract addresses set in both greeters")

    current_l2_greeting = l2_greeter.functions.greet().call()
    logger.info(f'Current L2 greeting: "{current_l2_greeting}"')

    logger.info("Updating greeting from L1 to L2:")

    # Submission fee scales with the calldata size: the encoded string plus the 4-byte selector
    new_greeting_bytes = encode(["string"], [NEW_GREETING])
    new_greeting_bytes_length = len(new_greeting_bytes) + 4

    gas_estimator = L1ToL2MessageGasEstimator(l2_w3, l2_network)
    submission_price_wei = gas_estimator.estimate_submission_fee(
        l1_w3, l1_w3.eth.gas_price, new_greeting_bytes_length
    )
    logger.info(f"Current retryable base submission price: {submission_price_wei}")
    submission_price_wei *= SUBMISSION_FEE_MULTIPLIER

    gas_price_bid = l2_w3.eth.gas_price
    logger.info(f"L2 gas price: {gas_price_bid}")

    calldata = Web3.keccak(text="setGreeting(string)")[:4] + new_greeting_bytes
    max_gas = gas_estimator.estimate_retryable_ticket_gas_limit(
        l1_greeter.address,
        l2_greeter.address,
        0,
        account.address,
        account.address,
        calldata,
        Web3.to_wei(1, "ether"),
    )

    call_value = submission_price_wei + gas_price_bid * max_gas
    logger.info(f"Sending greeting to L2 with {call_value} callValue for L2 fees:")

    set_greeting_receipt = send_transaction(
        l1_w3,
        account,
        l1_greeter.functions.setGreetingInL2(NEW_GREETING, submission_price_wei, max_gas, gas_price_bid),
        value=call_value,
    )
    l1_tx_receipt = L1TransactionReceipt(set_greeting_receipt)
    logger.info(f"Greeting txn confirmed on L1! {l1_tx_receipt.transaction_hash.to_0x_hex()}")

    # The retryable is auto-redeemed on L2 once the sequencer picks it up
    message = l1_tx_receipt.get_l1_to_l2_message(l2_w3)
    status = message.wait_for_status()

    if status == L1ToL2MessageStatus.REDEEMED:
        logger.info(f"L2 retryable txn executed {message.l2_tx_hash.to_0x_hex()}")
    else:
        logger.info(f"L2 retryable txn failed with status {status.name}")

    new_greeting_l2 = l2_greeter.functions.greet().call()
    logger.info(f'Updated L2 greeting: "{new_greeting_l2}"')


if __name__ == "__main__":
    main()
