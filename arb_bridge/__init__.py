"""
arb_bridge - helpers for moving ETH, tokens and messages between Ethereum and an Arbitrum chain.

- actions: deposit / withdraw ETH and ERC-20 tokens, approve gateways, deploy demo contracts
- message: retryable fee estimation, L1 -> L2 message tracking, receipt wrappers
- networks: registry of L1 / L2 network pairs
"""

from arb_bridge._version import VERSION

# Actions
from arb_bridge.actions import (
    ApproveTokenParams,
    EthDepositParams,
    EthWithdrawParams,
    TokenDepositParams,
    TokenWithdrawParams,
    approve_token,
    deploy_contract,
    deposit_eth,
    deposit_token,
    get_l1_gateway_address,
    get_l2_erc20_address,
    get_l2_token_contract,
    withdraw_eth,
    withdraw_token,
)

# Config
from arb_bridge.config import get_config, load_contract_abis, require_env_variables

# Messages
from arb_bridge.message import (
    EthDepositMessage,
    L1ToL2Message,
    L1ToL2MessageGasEstimator,
    L1TransactionReceipt,
    L2TransactionReceipt,
)

# Networks
from arb_bridge.networks import (
    L1Network,
    L2Network,
    add_custom_network,
    get_l1_network,
    get_l2_network,
    load_custom_network,
)

# Types
from arb_bridge.types import EthDepositStatus, L1ToL2MessageStatus

__all__ = [
    "VERSION",
    # Actions - Parameter classes
    "ApproveTokenParams",
    "EthDepositParams",
    "EthWithdrawParams",
    "TokenDepositParams",
    "TokenWithdrawParams",
    # Actions - Functions
    "approve_token",
    "deploy_contract",
    "deposit_eth",
    "deposit_token",
    "get_l1_gateway_address",
    "get_l2_erc20_address",
    "get_l2_token_contract",
    "withdraw_eth",
    "withdraw_token",
    # Config
    "get_config",
    "load_contract_abis",
    "require_env_variables",
    # Messages
    "EthDepositMessage",
    "L1ToL2Message",
    "L1ToL2MessageGasEstimator",
    "L1TransactionReceipt",
    "L2TransactionReceipt",
    # Networks
    "L1Network",
    "L2Network",
    "add_custom_network",
    "get_l1_network",
    "get_l2_network",
    "load_custom_network",
    # Types
    "EthDepositStatus",
    "L1ToL2MessageStatus",
]
