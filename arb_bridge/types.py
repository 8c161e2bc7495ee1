from enum import IntEnum


class L1ToL2MessageStatus(IntEnum):
    NOT_YET_CREATED = 1
    CREATION_FAILED = 2
    FUNDS_DEPOSITED_ON_L2 = 3
    REDEEMED = 4
    EXPIRED = 5


class EthDepositStatus(IntEnum):
    PENDING = 1
    DEPOSITED = 2


class InboxMessageKind(IntEnum):
    """Message kinds recorded by the Bridge `MessageDelivered` event."""

    L1_MESSAGE_TYPE_SUBMIT_RETRYABLE_TX = 9
    L1_MESSAGE_TYPE_ETH_DEPOSIT = 12
