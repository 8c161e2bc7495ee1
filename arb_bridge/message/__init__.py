from arb_bridge.message.gas_estimator import (
    GasEstimates,
    GasLimitOptions,
    L1ToL2MessageGasEstimator,
    PercentIncreaseOptions,
    RetryableGasOverrides,
)
from arb_bridge.message.l1_to_l2 import (
    EthDepositMessage,
    L1ToL2Message,
    SubmitRetryableData,
    calculate_deposit_tx_id,
    calculate_submit_retryable_id,
    parse_eth_deposit_data,
    parse_submit_retryable_data,
)
from arb_bridge.message.receipts import (
    L1ToL2WaitResult,
    L1TransactionReceipt,
    L2ToL1TxEvent,
    L2TransactionReceipt,
    MessageEvents,
)

__all__ = [
    # Gas estimation
    "GasEstimates",
    "GasLimitOptions",
    "L1ToL2MessageGasEstimator",
    "PercentIncreaseOptions",
    "RetryableGasOverrides",
    # L1 -> L2 messages
    "EthDepositMessage",
    "L1ToL2Message",
    "SubmitRetryableData",
    "calculate_deposit_tx_id",
    "calculate_submit_retryable_id",
    "parse_eth_deposit_data",
    "parse_submit_retryable_data",
    # Receipts
    "L1ToL2WaitResult",
    "L1TransactionReceipt",
    "L2ToL1TxEvent",
    "L2TransactionReceipt",
    "MessageEvents",
]
