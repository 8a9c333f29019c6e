"""
Request assembler: market context types and per-operation construction.
"""

from .builder import AccountListBuilder, Segment
from .context import DiscountAccount, InstanceContext, MarketContext, PositionInfo
from .instructions import (
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
from .labels import CLOCK_SYSVAR_ID, DEFAULT_LABELS, TOKEN_PROGRAM_ID, LabelTable

__all__ = [
    "AccountListBuilder",
    "Segment",
    "DiscountAccount",
    "InstanceContext",
    "MarketContext",
    "PositionInfo",
    "LabelTable",
    "DEFAULT_LABELS",
    "TOKEN_PROGRAM_ID",
    "CLOCK_SYSVAR_ID",
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
]
