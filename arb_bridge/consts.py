# Nitro precompiles
ARB_SYS_ADDRESS = "0x0000000000000000000000000000000000000064"
ARB_RETRYABLE_TX_ADDRESS = "0x000000000000000000000000000000000000006E"
NODE_INTERFACE_ADDRESS = "0x00000000000000000000000000000000000000C8"

ADDRESS_ALIAS_OFFSET = 0x1111000000000000000000000000000000001111
ADDRESS_ZERO = "0x0000000000000000000000000000000000000000"

MAX_UINT256 = 2**256 - 1

# Typed transaction prefixes used by Nitro for L1-originated transactions
ETH_DEPOSIT_TX_TYPE = 0x64
SUBMIT_RETRYABLE_TX_TYPE = 0x69

# Fee estimation defaults (percentages added on top of the queried value)
DEFAULT_SUBMISSION_FEE_PERCENT_INCREASE = 300
DEFAULT_GAS_PRICE_PERCENT_INCREASE = 200
DEFAULT_GAS_LIMIT_PERCENT_INCREASE = 0

# Deposit assumed by NodeInterface when estimating a retryable's gas limit
DEFAULT_SENDER_DEPOSIT = 10**18

# Polling for L2 side of L1 -> L2 messages
DEFAULT_MESSAGE_TIMEOUT_SECONDS = 900
DEFAULT_POLL_INTERVAL_SECONDS = 2.0

REQUIRED_ENV_VARIABLES = ["DEVNET_PRIVKEY", "L1RPC", "L2RPC"]
