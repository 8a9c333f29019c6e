"""
Request construction, one function per operation kind.

Each function maps (market context, operation arguments) to a complete
`Instruction`: the target program, the ordered account list and the encoded
payload. Functions are pure; they read the context and never mutate it.

Account flags are noted as rw (writable), ro (readonly) and s (signer).
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from solders.instruction import Instruction
from solders.pubkey import Pubkey

from ..schema.codec import encode_operation
from ..schema.types import (
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
    OperationKind,
    Rebalance,
    TransferPosition,
    TransferUserAccount,
    UpdateOracleAccount,
    WithdrawBudget,
)
from .builder import AccountListBuilder
from .context import DiscountAccount, InstanceContext, MarketContext, PositionInfo
from .labels import CLOCK_SYSVAR_ID, DEFAULT_LABELS, TOKEN_PROGRAM_ID, LabelTable

logger = logging.getLogger(__name__)


def _request(ctx: MarketContext, op: OperationKind, accounts: AccountListBuilder) -> Instruction:
    data = encode_operation(op)
    metas = accounts.build()
    logger.debug(
        "built %s request: %d account(s), %d payload byte(s)",
        type(op).__name__,
        len(metas),
        len(data),
    )
    return Instruction(program_id=ctx.program_id, data=data, accounts=metas)


def _trade_prefix(ctx: MarketContext, instance: InstanceContext) -> AccountListBuilder:
    # token ro, clock ro, market rw, instance rw, signer ro, vault rw, fee sink rw
    return (
        AccountListBuilder()
        .readonly(TOKEN_PROGRAM_ID)
        .readonly(CLOCK_SYSVAR_ID)
        .writable(ctx.market_account)
        .writable(instance.instance_account)
        .readonly(ctx.market_signer_account)
        .writable(ctx.market_vault)
        .writable(ctx.fee_sink)
    )


def create_market(
    ctx: MarketContext,
    market_symbol: str,
    initial_quote_amount: int,
    coin_decimals: int,
    quote_decimals: int,
) -> Instruction:
    """
    Create a market for a currency.

    Accounts: market rw, clock ro, oracle ro, admin ro, vault ro.
    """
    op = CreateMarket(
        signer_nonce=ctx.signer_nonce,
        symbol=market_symbol,
        initial_quote_amount=initial_quote_amount,
        coin_decimals=coin_decimals,
        quote_decimals=quote_decimals,
    )
    accounts = (
        AccountListBuilder()
        .writable(ctx.market_account)
        .readonly(CLOCK_SYSVAR_ID)
        .readonly(ctx.oracle_account)
        .readonly(ctx.admin_account)
        .readonly(ctx.market_vault)
    )
    return _request(ctx, op, accounts)


def add_instance(
    ctx: MarketContext,
    instance_account: Pubkey,
    memory_pages: Iterable[Pubkey],
) -> Instruction:
    """
    Register a new instance together with its initial memory pages.

    Accounts: market rw, admin rw s, instance rw, pages rw.
    """
    instance = InstanceContext(instance_account=instance_account, memory_pages=tuple(memory_pages))
    accounts = (
        AccountListBuilder()
        .writable(ctx.market_account)
        .writable(ctx.admin_account, signer=True)
        .writable(instance.instance_account)
        .pages(instance)
    )
    return _request(ctx, AddInstance(), accounts)


def update_oracle_account(
    ctx: MarketContext,
    oracle_mapping_account: Pubkey,
    oracle_product_account: Pubkey,
    oracle_price_account: Pubkey,
) -> Instruction:
    accounts = (
        AccountListBuilder()
        .writable(ctx.market_account)
        .readonly(oracle_mapping_account)
        .readonly(oracle_product_account)
        .readonly(oracle_price_account)
    )
    return _request(ctx, UpdateOracleAccount(), accounts)


def add_budget(
    ctx: MarketContext,
    amount: int,
    source_owner: Pubkey,
    source_token_account: Pubkey,
    user_account: Pubkey,
) -> Instruction:
    """
    Move quote tokens from `source_token_account` into the user's budget.

    Accounts: token ro, market rw, vault rw, user rw, source owner ro s, source rw.
    """
    accounts = (
        AccountListBuilder()
        .readonly(TOKEN_PROGRAM_ID)
        .writable(ctx.market_account)
        .writable(ctx.market_vault)
        .writable(user_account)
        .readonly(source_owner, signer=True)
        .writable(source_token_account)
    )
    return _request(ctx, AddBudget(amount=amount), accounts)


def withdraw_budget(
    ctx: MarketContext,
    amount: int,
    target_account: Pubkey,
    user_account_owner: Pubkey,
    user_account: Pubkey,
) -> Instruction:
    """
    Withdraw quote tokens from the user's budget to `target_account`.

    Accounts: token ro, market rw, signer ro, vault rw, owner ro s, user rw, target rw.
    """
    accounts = (
        AccountListBuilder()
        .readonly(TOKEN_PROGRAM_ID)
        .writable(ctx.market_account)
        .readonly(ctx.market_signer_account)
        .writable(ctx.market_vault)
        .readonly(user_account_owner, signer=True)
        .writable(user_account)
        .writable(target_account)
    )
    return _request(ctx, WithdrawBudget(amount=amount), accounts)


def open_position(
    ctx: MarketContext,
    position: PositionInfo,
    collateral: int,
    leverage: int,
    predicted_entry_price: int,
    max_slippage: int,
    *,
    discount: Optional[DiscountAccount] = None,
    referrer: Optional[Pubkey] = None,
    labels: LabelTable = DEFAULT_LABELS,
) -> Instruction:
    """
    Open a new position.

    Accounts:
        0..6  token, clock, market, instance, signer, vault, fee sink
        7     position owner (ro, s)
        8     user account (rw)
        9     trade label (ro)
        10    oracle (ro)
        11..  instance pages (rw)
        then  discount address (ro), discount owner (ro, s)   if `discount`
        then  referrer (rw)                                   if `referrer`
    """
    instance = ctx.instance(position.instance_index)
    op = OpenPosition(
        side=position.side,
        collateral=collateral,
        instance_index=position.instance_index,
        leverage=leverage,
        predicted_entry_price=predicted_entry_price,
        max_slippage=max_slippage,
    )
    accounts = (
        _trade_prefix(ctx, instance)
        .readonly(position.user_account_owner, signer=True)
        .writable(position.user_account)
        .readonly(labels.trade)
        .readonly(ctx.oracle_account)
        .pages(instance)
        .optional(discount, referrer)
    )
    return _request(ctx, op, accounts)


def increase_position(
    ctx: MarketContext,
    add_collateral: int,
    leverage: int,
    instance_index: int,
    position_index: int,
    position_owner: Pubkey,
    user_account: Pubkey,
    predicted_entry_price: int,
    max_slippage: int,
    *,
    discount: Optional[DiscountAccount] = None,
    referrer: Optional[Pubkey] = None,
    labels: LabelTable = DEFAULT_LABELS,
) -> Instruction:
    """
    Add collateral to an existing position.

    Accounts: token ro, clock ro, market rw, signer ro, vault rw, fee sink rw,
    instance rw, owner ro s, user rw, trade label ro, oracle ro, pages, then
    the optional discount pair and referrer.
    """
    instance = ctx.instance(instance_index)
    op = IncreasePosition(
        add_collateral=add_collateral,
        instance_index=instance_index,
        leverage=leverage,
        position_index=position_index,
        predicted_entry_price=predicted_entry_price,
        max_slippage=max_slippage,
    )
    # The instance sits after the fee sink here, unlike open/close.
    accounts = (
        AccountListBuilder()
        .readonly(TOKEN_PROGRAM_ID)
        .readonly(CLOCK_SYSVAR_ID)
        .writable(ctx.market_account)
        .readonly(ctx.market_signer_account)
        .writable(ctx.market_vault)
        .writable(ctx.fee_sink)
        .writable(instance.instance_account)
        .readonly(position_owner, signer=True)
        .writable(user_account)
        .readonly(labels.trade)
        .readonly(ctx.oracle_account)
        .pages(instance)
        .optional(discount, referrer)
    )
    return _request(ctx, op, accounts)


def close_position(
    ctx: MarketContext,
    position: PositionInfo,
    closing_collateral: int,
    closing_base_amount: int,
    position_index: int,
    predicted_entry_price: int,
    max_slippage: int,
    *,
    discount: Optional[DiscountAccount] = None,
    referrer: Optional[Pubkey] = None,
    labels: LabelTable = DEFAULT_LABELS,
) -> Instruction:
    """
    Close all or part of a position.

    Accounts: token, clock, market, instance, signer, vault, fee sink,
    oracle ro, owner ro s, user rw, trade label ro, pages, then the optional
    discount pair and referrer.
    """
    instance = ctx.instance(position.instance_index)
    op = ClosePosition(
        position_index=position_index,
        closing_collateral=closing_collateral,
        closing_base_amount=closing_base_amount,
        predicted_entry_price=predicted_entry_price,
        max_slippage=max_slippage,
    )
    accounts = (
        _trade_prefix(ctx, instance)
        .readonly(ctx.oracle_account)
        .readonly(position.user_account_owner, signer=True)
        .writable(position.user_account)
        .readonly(labels.trade)
        .pages(instance)
        .optional(discount, referrer)
    )
    return _request(ctx, op, accounts)


def collect_garbage(
    ctx: MarketContext,
    instance_index: int,
    max_iterations: int,
    target_token_account: Pubkey,
) -> Instruction:
    """
    Free closed slots in the instance's positions book; the reward goes to
    `target_token_account`.

    Accounts: token ro, market rw, instance rw, vault rw, signer ro, target rw, pages.
    """
    instance = ctx.instance(instance_index)
    op = CollectGarbage(instance_index=instance_index, max_iterations=max_iterations)
    accounts = (
        AccountListBuilder()
        .readonly(TOKEN_PROGRAM_ID)
        .writable(ctx.market_account)
        .writable(instance.instance_account)
        .writable(ctx.market_vault)
        .readonly(ctx.market_signer_account)
        .writable(target_token_account)
        .pages(instance)
    )
    return _request(ctx, op, accounts)


def crank_liquidation(
    ctx: MarketContext,
    instance_index: int,
    target_token_account: Pubkey,
    *,
    labels: LabelTable = DEFAULT_LABELS,
) -> Instruction:
    """
    Liquidate losing positions of an instance; the cranker reward goes to
    `target_token_account`.

    Accounts: token ro, market rw, instance rw, signer ro, fee sink rw,
    vault rw, oracle ro, target rw, liquidation label ro, pages.
    """
    instance = ctx.instance(instance_index)
    accounts = (
        AccountListBuilder()
        .readonly(TOKEN_PROGRAM_ID)
        .writable(ctx.market_account)
        .writable(instance.instance_account)
        .readonly(ctx.market_signer_account)
        .writable(ctx.fee_sink)
        .writable(ctx.market_vault)
        .readonly(ctx.oracle_account)
        .writable(target_token_account)
        .readonly(labels.liquidation)
        .pages(instance)
    )
    return _request(ctx, CrankLiquidation(instance_index=instance_index), accounts)


def crank_funding(ctx: MarketContext, *, labels: LabelTable = DEFAULT_LABELS) -> Instruction:
    """Record index/mark prices for the funding calculation."""
    accounts = (
        AccountListBuilder()
        .readonly(CLOCK_SYSVAR_ID)
        .writable(ctx.market_account)
        .readonly(ctx.oracle_account)
        .readonly(labels.funding)
    )
    return _request(ctx, CrankFunding(), accounts)


def extract_funding(
    ctx: MarketContext,
    instance_index: int,
    user_account: Pubkey,
    *,
    labels: LabelTable = DEFAULT_LABELS,
) -> Instruction:
    """
    Settle accrued funding on a user account.

    Accounts: market rw, instance rw, user rw, funding extraction label ro,
    oracle ro, pages.
    """
    instance = ctx.instance(instance_index)
    accounts = (
        AccountListBuilder()
        .writable(ctx.market_account)
        .writable(instance.instance_account)
        .writable(user_account)
        .readonly(labels.funding_extraction)
        .readonly(ctx.oracle_account)
        .pages(instance)
    )
    return _request(ctx, FundingExtraction(instance_index=instance_index), accounts)


def change_k(ctx: MarketContext, factor: int) -> Instruction:
    accounts = (
        AccountListBuilder()
        .writable(ctx.market_account)
        .readonly(ctx.admin_account, signer=True)
    )
    return _request(ctx, ChangeK(factor=factor), accounts)


def close_account(
    ctx: MarketContext,
    user_account: Pubkey,
    user_account_owner: Pubkey,
    lamports_target: Pubkey,
) -> Instruction:
    accounts = (
        AccountListBuilder()
        .writable(user_account)
        .readonly(user_account_owner, signer=True)
        .writable(lamports_target)
    )
    return _request(ctx, CloseAccount(), accounts)


def add_page(ctx: MarketContext, instance_index: int, new_memory_page: Pubkey) -> Instruction:
    """
    Append a memory page to an instance.

    Accounts: market ro, admin ro s, instance rw, new page ro.
    """
    instance = ctx.instance(instance_index)
    accounts = (
        AccountListBuilder()
        .readonly(ctx.market_account)
        .readonly(ctx.admin_account, signer=True)
        .writable(instance.instance_account)
        .readonly(new_memory_page)
    )
    return _request(ctx, AddPage(instance_index=instance_index), accounts)


def rebalance(
    ctx: MarketContext,
    user_account: Pubkey,
    user_account_owner: Pubkey,
    instance_index: int,
    collateral: int,
) -> Instruction:
    """
    Admin-signed collateral rebalance of a user's positions in one instance.

    Accounts: token ro, clock ro, market rw, instance rw, signer ro, vault rw,
    fee sink rw, owner ro s, user rw, admin ro s, pages.
    """
    instance = ctx.instance(instance_index)
    accounts = (
        AccountListBuilder()
        .readonly(TOKEN_PROGRAM_ID)
        .readonly(CLOCK_SYSVAR_ID)
        .writable(ctx.market_account)
        # The engine's reference client passes instances[0] here; requests
        # differ on the wire whenever instance_index != 0.
        .writable(instance.instance_account)
        .readonly(ctx.market_signer_account)
        .writable(ctx.market_vault)
        .writable(ctx.fee_sink)
        .readonly(user_account_owner, signer=True)
        .writable(user_account)
        .readonly(ctx.admin_account, signer=True)
        .pages(instance)
    )
    return _request(ctx, Rebalance(collateral=collateral, instance_index=instance_index), accounts)


def transfer_user_account(
    ctx: MarketContext,
    user_account: Pubkey,
    user_account_owner: Pubkey,
    new_user_account_owner: Pubkey,
) -> Instruction:
    accounts = (
        AccountListBuilder()
        .readonly(user_account_owner, signer=True)
        .writable(user_account)
        .readonly(new_user_account_owner)
    )
    return _request(ctx, TransferUserAccount(), accounts)


def transfer_position(
    ctx: MarketContext,
    position_index: int,
    source_user_account: Pubkey,
    source_user_account_owner: Pubkey,
    destination_user_account: Pubkey,
    destination_user_account_owner: Pubkey,
) -> Instruction:
    """Move one position between user accounts; both owners sign."""
    accounts = (
        AccountListBuilder()
        .readonly(source_user_account_owner, signer=True)
        .writable(source_user_account)
        .readonly(destination_user_account_owner, signer=True)
        .writable(destination_user_account)
    )
    return _request(ctx, TransferPosition(position_index=position_index), accounts)
