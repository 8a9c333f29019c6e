"""
Request encoding for the perpetuals execution engine.

- `schema`: operation kinds and their canonical binary payloads
- `accounts`: market context and per-operation request construction
"""

from .accounts import (
    DEFAULT_LABELS,
    DiscountAccount,
    InstanceContext,
    LabelTable,
    MarketContext,
    PositionInfo,
    add_budget,
    add_instance,
    add_page,
    change_k,
    close_account,
    close_position,
    collect_garbage,
    crank_funding,
    crank_liquidation,
    create_market,
    extract_funding,
    increase_position,
    open_position,
    rebalance,
    transfer_position,
    transfer_user_account,
    update_oracle_account,
    withdraw_budget,
)
from .audit import instruction_to_dict
from .errors import (
    AccountOrderError,
    DecodingError,
    EncodingError,
    InvalidInstanceIndex,
    MissingOptionalAccount,
    PerpRequestError,
)
from .schema import (
    OperationKind,
    OperationTag,
    PositionSide,
    decode_operation,
    discriminant,
    encode_operation,
)

__version__ = "0.1.0"

__all__ = [
    "MarketContext",
    "InstanceContext",
    "DiscountAccount",
    "PositionInfo",
    "LabelTable",
    "DEFAULT_LABELS",
    "OperationKind",
    "OperationTag",
    "PositionSide",
    "encode_operation",
    "decode_operation",
    "discriminant",
    "create_market",
    "add_instance",
    "update_oracle_account",
    "open_position",
    "add_budget",
    "withdraw_budget",
    "increase_position",
    "close_position",
    "collect_garbage",
    "crank_liquidation",
    "crank_funding",
    "extract_funding",
    "change_k",
    "close_account",
    "add_page",
    "rebalance",
    "transfer_user_account",
    "transfer_position",
    "instruction_to_dict",
    "PerpRequestError",
    "InvalidInstanceIndex",
    "EncodingError",
    "DecodingError",
    "MissingOptionalAccount",
    "AccountOrderError",
]
