"""Gathering configuration from environment variables and ABIs"""

import json
import os
from typing import Optional

from dotenv import load_dotenv
from web3 import Web3

from arb_bridge.consts import (
    ARB_RETRYABLE_TX_ADDRESS,
    ARB_SYS_ADDRESS,
    NODE_INTERFACE_ADDRESS,
    REQUIRED_ENV_VARIABLES,
)
from arb_bridge.exceptions import MissingEnvironmentVariableError
from arb_bridge.networks import L2Network, get_l1_network, get_l2_network

_ABI_FILES = {
    "inbox_abi": "Inbox.json",
    "bridge_abi": "Bridge.json",
    "arb_sys_abi": "ArbSys.json",
    "arb_retryable_tx_abi": "ArbRetryableTx.json",
    "node_interface_abi": "NodeInterface.json",
    "l1_gateway_router_abi": "L1GatewayRouter.json",
    "l1_erc20_gateway_abi": "L1ERC20Gateway.json",
    "l2_gateway_router_abi": "L2GatewayRouter.json",
    "erc20_abi": "Erc20.json",
}


def require_env_variables(names: list[str]):
    """Fail early, naming every required variable that is unset or empty."""
    missing = [name for name in names if not os.environ.get(name)]
    if missing:
        raise MissingEnvironmentVariableError(
            f"Missing environment variable(s): {', '.join(missing)}. Set them in your environment or a .env file."
        )


def load_contract_abis() -> dict:
    """Load all contract ABIs from files."""
    # Get the directory where this file is located
    current_dir = os.path.dirname(os.path.abspath(__file__))
    # Build path to the abis directory
    abis_dir = os.path.join(current_dir, "abis")

    abis = {}
    for key, filename in _ABI_FILES.items():
        with open(os.path.join(abis_dir, filename), encoding="utf-8") as f:
            abis[key] = json.load(f)

    return abis


def get_config(network: Optional[L2Network] = None) -> dict:
    """Get complete configuration for bridging between the L1 and L2 in the environment.

    Args:
        network: L2 network to use. When omitted it is looked up from the
            chain id reported by the L2 RPC endpoint.
    """
    load_dotenv()
    require_env_variables(REQUIRED_ENV_VARIABLES)

    private_key = os.environ["DEVNET_PRIVKEY"]

    l1_w3 = Web3(Web3.HTTPProvider(os.environ["L1RPC"]))
    l2_w3 = Web3(Web3.HTTPProvider(os.environ["L2RPC"]))

    # Same key signs on both chains
    w3account = l1_w3.eth.account.from_key(private_key)
    l1_w3.eth.default_account = w3account.address
    l2_w3.eth.default_account = w3account.address

    l2_network = network or get_l2_network(l2_w3)
    l1_network = get_l1_network(l2_network.partner_chain_id)

    abis = load_contract_abis()
    eth_bridge = l2_network.eth_bridge
    token_bridge = l2_network.token_bridge

    # Create contract instances
    w3inbox = l1_w3.eth.contract(address=eth_bridge.inbox, abi=abis["inbox_abi"])
    w3bridge = l1_w3.eth.contract(address=eth_bridge.bridge, abi=abis["bridge_abi"])
    w3l1_gateway_router = l1_w3.eth.contract(
        address=token_bridge.l1_gateway_router, abi=abis["l1_gateway_router_abi"]
    )
    w3l2_gateway_router = l2_w3.eth.contract(
        address=token_bridge.l2_gateway_router, abi=abis["l2_gateway_router_abi"]
    )
    w3arb_sys = l2_w3.eth.contract(address=Web3.to_checksum_address(ARB_SYS_ADDRESS), abi=abis["arb_sys_abi"])
    w3arb_retryable_tx = l2_w3.eth.contract(
        address=Web3.to_checksum_address(ARB_RETRYABLE_TX_ADDRESS), abi=abis["arb_retryable_tx_abi"]
    )
    w3node_interface = l2_w3.eth.contract(
        address=Web3.to_checksum_address(NODE_INTERFACE_ADDRESS), abi=abis["node_interface_abi"]
    )

    return {
        "private_key": private_key,
        "l1_w3": l1_w3,
        "l2_w3": l2_w3,
        "w3account": w3account,
        "l1_network": l1_network,
        "l2_network": l2_network,
        "abis": abis,
        "w3contracts": {
            "inbox": w3inbox,
            "bridge": w3bridge,
            "l1_gateway_router": w3l1_gateway_router,
            "l2_gateway_router": w3l2_gateway_router,
            "arb_sys": w3arb_sys,
            "arb_retryable_tx": w3arb_retryable_tx,
            "node_interface": w3node_interface,
        },
    }
