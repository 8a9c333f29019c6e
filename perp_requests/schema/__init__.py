"""
Operation schema: the closed set of operation kinds and their binary codec.
"""

from .codec import decode_operation, discriminant, encode_operation
from .types import (
    OPERATION_CLASSES,
    AddBudget,
    AddInstance,
    AddPage,
    ChangeK,
    CloseAccount,
    ClosePosition,
    CollectGarbage,
    CrankFunding,
    CrankLiquidation,
    CreateMarket,
    FundingExtraction,
    IncreasePosition,
    OpenPosition,
    Operation,
    OperationKind,
    OperationTag,
    PositionSide,
    Rebalance,
    TransferPosition,
    TransferUserAccount,
    UpdateOracleAccount,
    WithdrawBudget,
)

__all__ = [
    "decode_operation",
    "discriminant",
    "encode_operation",
    "OPERATION_CLASSES",
    "Operation",
    "OperationKind",
    "OperationTag",
    "PositionSide",
    "CreateMarket",
    "AddInstance",
    "UpdateOracleAccount",
    "OpenPosition",
    "AddBudget",
    "WithdrawBudget",
    "IncreasePosition",
    "ClosePosition",
    "CollectGarbage",
    "CrankLiquidation",
    "CrankFunding",
    "FundingExtraction",
    "ChangeK",
    "CloseAccount",
    "AddPage",
    "Rebalance",
    "TransferUserAccount",
    "TransferPosition",
]
