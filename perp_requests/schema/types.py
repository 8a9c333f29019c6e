"""Operation kinds understood by the perpetuals execution engine.

Each kind is a frozen dataclass; its fields, in declaration order, are the
argument tuple written after the one-byte discriminant.

Units/conventions:
- `predicted_entry_price` and `max_slippage` are 32-bit fixed point, pre-scaled
  by the caller (value * 2**32). They are carried as opaque u64.
- collateral and budget amounts are raw quote-token units.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, unique
from typing import ClassVar, Dict, Type, Union

from .wire import EnumByte, STRING_ARG, U16_ARG, U64_ARG, U8_ARG, arg


@unique
class PositionSide(IntEnum):
    SHORT = 0
    LONG = 1


SIDE_ARG = EnumByte(PositionSide)


@unique
class OperationTag(IntEnum):
    """Discriminant byte, assigned by declaration order. Never reorder."""
    CREATE_MARKET = 0
    ADD_INSTANCE = 1
    UPDATE_ORACLE_ACCOUNT = 2
    OPEN_POSITION = 3
    ADD_BUDGET = 4
    WITHDRAW_BUDGET = 5
    INCREASE_POSITION = 6
    CLOSE_POSITION = 7
    COLLECT_GARBAGE = 8
    CRANK_LIQUIDATION = 9
    CRANK_FUNDING = 10
    FUNDING_EXTRACTION = 11
    CHANGE_K = 12
    CLOSE_ACCOUNT = 13
    ADD_PAGE = 14
    REBALANCE = 15
    TRANSFER_USER_ACCOUNT = 16
    TRANSFER_POSITION = 17


@dataclass(frozen=True)
class Operation:
    TAG: ClassVar[OperationTag]

    @property
    def tag(self) -> OperationTag:
        return self.TAG


@dataclass(frozen=True)
class CreateMarket(Operation):
    TAG: ClassVar[OperationTag] = OperationTag.CREATE_MARKET

    signer_nonce: int = arg(U8_ARG)
    symbol: str = arg(STRING_ARG)
    initial_quote_amount: int = arg(U64_ARG)
    coin_decimals: int = arg(U8_ARG)
    quote_decimals: int = arg(U8_ARG)


@dataclass(frozen=True)
class AddInstance(Operation):
    TAG: ClassVar[OperationTag] = OperationTag.ADD_INSTANCE


@dataclass(frozen=True)
class UpdateOracleAccount(Operation):
    TAG: ClassVar[OperationTag] = OperationTag.UPDATE_ORACLE_ACCOUNT


@dataclass(frozen=True)
class OpenPosition(Operation):
    TAG: ClassVar[OperationTag] = OperationTag.OPEN_POSITION

    side: PositionSide = arg(SIDE_ARG)
    collateral: int = arg(U64_ARG)
    instance_index: int = arg(U8_ARG)
    leverage: int = arg(U64_ARG)
    predicted_entry_price: int = arg(U64_ARG)
    max_slippage: int = arg(U64_ARG)


@dataclass(frozen=True)
class AddBudget(Operation):
    TAG: ClassVar[OperationTag] = OperationTag.ADD_BUDGET

    amount: int = arg(U64_ARG)


@dataclass(frozen=True)
class WithdrawBudget(Operation):
    TAG: ClassVar[OperationTag] = OperationTag.WITHDRAW_BUDGET

    amount: int = arg(U64_ARG)


@dataclass(frozen=True)
class IncreasePosition(Operation):
    TAG: ClassVar[OperationTag] = OperationTag.INCREASE_POSITION

    add_collateral: int = arg(U64_ARG)
    instance_index: int = arg(U8_ARG)
    leverage: int = arg(U64_ARG)
    position_index: int = arg(U16_ARG)
    predicted_entry_price: int = arg(U64_ARG)
    max_slippage: int = arg(U64_ARG)


@dataclass(frozen=True)
class ClosePosition(Operation):
    TAG: ClassVar[OperationTag] = OperationTag.CLOSE_POSITION

    position_index: int = arg(U16_ARG)
    closing_collateral: int = arg(U64_ARG)
    closing_base_amount: int = arg(U64_ARG)
    predicted_entry_price: int = arg(U64_ARG)
    max_slippage: int = arg(U64_ARG)


@dataclass(frozen=True)
class CollectGarbage(Operation):
    TAG: ClassVar[OperationTag] = OperationTag.COLLECT_GARBAGE

    instance_index: int = arg(U8_ARG)
    max_iterations: int = arg(U64_ARG)


@dataclass(frozen=True)
class CrankLiquidation(Operation):
    TAG: ClassVar[OperationTag] = OperationTag.CRANK_LIQUIDATION

    instance_index: int = arg(U8_ARG)


@dataclass(frozen=True)
class CrankFunding(Operation):
    TAG: ClassVar[OperationTag] = OperationTag.CRANK_FUNDING


@dataclass(frozen=True)
class FundingExtraction(Operation):
    TAG: ClassVar[OperationTag] = OperationTag.FUNDING_EXTRACTION

    instance_index: int = arg(U8_ARG)


@dataclass(frozen=True)
class ChangeK(Operation):
    TAG: ClassVar[OperationTag] = OperationTag.CHANGE_K

    factor: int = arg(U64_ARG)


@dataclass(frozen=True)
class CloseAccount(Operation):
    TAG: ClassVar[OperationTag] = OperationTag.CLOSE_ACCOUNT


@dataclass(frozen=True)
class AddPage(Operation):
    TAG: ClassVar[OperationTag] = OperationTag.ADD_PAGE

    instance_index: int = arg(U8_ARG)


@dataclass(frozen=True)
class Rebalance(Operation):
    TAG: ClassVar[OperationTag] = OperationTag.REBALANCE

    collateral: int = arg(U64_ARG)
    instance_index: int = arg(U8_ARG)


@dataclass(frozen=True)
class TransferUserAccount(Operation):
    TAG: ClassVar[OperationTag] = OperationTag.TRANSFER_USER_ACCOUNT


@dataclass(frozen=True)
class TransferPosition(Operation):
    TAG: ClassVar[OperationTag] = OperationTag.TRANSFER_POSITION

    position_index: int = arg(U16_ARG)


OperationKind = Union[
    CreateMarket,
    AddInstance,
    UpdateOracleAccount,
    OpenPosition,
    AddBudget,
    WithdrawBudget,
    IncreasePosition,
    ClosePosition,
    CollectGarbage,
    CrankLiquidation,
    CrankFunding,
    FundingExtraction,
    ChangeK,
    CloseAccount,
    AddPage,
    Rebalance,
    TransferUserAccount,
    TransferPosition,
]

OPERATION_CLASSES: Dict[OperationTag, Type[Operation]] = {
    cls.TAG: cls
    for cls in (
        CreateMarket,
        AddInstance,
        UpdateOracleAccount,
        OpenPosition,
        AddBudget,
        WithdrawBudget,
        IncreasePosition,
        ClosePosition,
        CollectGarbage,
        CrankLiquidation,
        CrankFunding,
        FundingExtraction,
        ChangeK,
        CloseAccount,
        AddPage,
        Rebalance,
        TransferUserAccount,
        TransferPosition,
    )
}
