from arb_bridge.utils.address_utils import apply_l1_to_l2_alias, undo_l1_to_l2_alias
from arb_bridge.utils.artifacts import load_artifact
from arb_bridge.utils.log import arb_log
from arb_bridge.utils.transaction_utils import decode_events, deploy_contract, send_transaction

__all__ = [
    "apply_l1_to_l2_alias",
    "undo_l1_to_l2_alias",
    "load_artifact",
    "arb_log",
    "decode_events",
    "deploy_contract",
    "send_transaction",
]
