"""
Well-known identities referenced by requests without caller input.

Label accounts are marker identities the engine checks by address. They are
derived from fixed base58 strings and must match the engine's constants
byte-for-byte.
"""

from __future__ import annotations

from dataclasses import dataclass

from solders.pubkey import Pubkey


TOKEN_PROGRAM_ID = Pubkey.from_string("TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA")
CLOCK_SYSVAR_ID = Pubkey.from_string("SysvarC1ock11111111111111111111111111111111")

TRADE_LABEL = "TradeRecord11111111111111111111111111111111"
LIQUIDATION_LABEL = "LiquidationRecord11111111111111111111111111"
FUNDING_LABEL = "FundingRecord111111111111111111111111111111"
FUNDING_EXTRACTION_LABEL = "FundingExtraction11111111111111111111111111"


@dataclass(frozen=True)
class LabelTable:
    trade: Pubkey
    liquidation: Pubkey
    funding: Pubkey
    funding_extraction: Pubkey

    @classmethod
    def from_strings(
        cls,
        *,
        trade: str = TRADE_LABEL,
        liquidation: str = LIQUIDATION_LABEL,
        funding: str = FUNDING_LABEL,
        funding_extraction: str = FUNDING_EXTRACTION_LABEL,
    ) -> "LabelTable":
        return cls(
            trade=Pubkey.from_string(trade),
            liquidation=Pubkey.from_string(liquidation),
            funding=Pubkey.from_string(funding),
            funding_extraction=Pubkey.from_string(funding_extraction),
        )


# Resolved once at import.
DEFAULT_LABELS = LabelTable.from_strings()
