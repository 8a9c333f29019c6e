from __future__ import annotations

from solders.pubkey import Pubkey

from perp_requests.accounts import labels
from perp_requests.accounts.labels import DEFAULT_LABELS, LabelTable


def test_label_constants_resolve_to_their_strings() -> None:
    assert str(DEFAULT_LABELS.trade) == "TradeRecord11111111111111111111111111111111"
    assert str(DEFAULT_LABELS.liquidation) == "LiquidationRecord11111111111111111111111111"
    assert str(DEFAULT_LABELS.funding) == "FundingRecord111111111111111111111111111111"
    assert str(DEFAULT_LABELS.funding_extraction) == "FundingExtraction11111111111111111111111111"


def test_labels_are_distinct_32_byte_identities() -> None:
    keys = [DEFAULT_LABELS.trade, DEFAULT_LABELS.liquidation, DEFAULT_LABELS.funding, DEFAULT_LABELS.funding_extraction]
    assert len(set(keys)) == 4
    assert all(len(bytes(k)) == 32 for k in keys)


def test_default_table_matches_fresh_resolution() -> None:
    assert LabelTable.from_strings() == DEFAULT_LABELS


def test_well_known_programs() -> None:
    assert labels.TOKEN_PROGRAM_ID == Pubkey.from_string("TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA")
    assert labels.CLOCK_SYSVAR_ID == Pubkey.from_string("SysvarC1ock11111111111111111111111111111111")
