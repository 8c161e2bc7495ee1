from arb_bridge.actions.erc20_bridger import (
    ApproveTokenParams,
    TokenDepositParams,
    TokenWithdrawParams,
    approve_token,
    deposit_token,
    get_l1_gateway_address,
    get_l2_erc20_address,
    get_l2_token_contract,
    withdraw_token,
)
from arb_bridge.actions.eth_bridger import EthDepositParams, EthWithdrawParams, deposit_eth, withdraw_eth
from arb_bridge.utils.transaction_utils import deploy_contract

__all__ = [
    "ApproveTokenParams",
    "approve_token",
    "deploy_contract",
    "EthDepositParams",
    "deposit_eth",
    "EthWithdrawParams",
    "withdraw_eth",
    "get_l1_gateway_address",
    "get_l2_erc20_address",
    "get_l2_token_contract",
    "TokenDepositParams",
    "deposit_token",
    "TokenWithdrawParams",
    "withdraw_token",
]
