"""
Caller-supplied context for building requests.

All types are frozen and rebuilt per call by the caller; nothing here is
cached or mutated by the assembler.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple

from solders.pubkey import Pubkey

from ..errors import InvalidInstanceIndex, MissingOptionalAccount
from ..schema.types import PositionSide


def _require_pubkey(value: object, *, name: str) -> Pubkey:
    if not isinstance(value, Pubkey):
        raise TypeError(f"{name} must be a Pubkey, got {type(value).__name__}")
    return value


def _pubkey_tuple(values: Iterable[object], *, name: str) -> Tuple[Pubkey, ...]:
    if isinstance(values, (str, bytes)):
        raise TypeError(f"{name} must be a sequence of Pubkey")
    return tuple(_require_pubkey(v, name=f"{name}[{i}]") for i, v in enumerate(values))


@dataclass(frozen=True)
class InstanceContext:
    """
    One trading instance: its account plus the paged positions-book accounts.

    Page order is the order the engine stored them in and is preserved as-is.
    """

    instance_account: Pubkey
    memory_pages: Tuple[Pubkey, ...] = ()

    def __post_init__(self) -> None:
        _require_pubkey(self.instance_account, name="instance_account")
        object.__setattr__(self, "memory_pages", _pubkey_tuple(self.memory_pages, name="memory_pages"))


@dataclass(frozen=True)
class MarketContext:
    """
    Long-lived description of one market and its instances.

    Attributes:
        program_id: The perpetuals program that receives every request
        signer_nonce: Nonce of the market signer derivation (used by create-market)
        market_signer_account: Program-derived signer owning the vault
        oracle_account: Index price account
        market_account: Market state account
        admin_account: Market admin
        market_vault: Quote-token vault owned by the market signer
        fee_sink: Account receiving the protocol share of trade fees
        instances: Ordered instances; requests address them by index
    """

    program_id: Pubkey
    signer_nonce: int
    market_signer_account: Pubkey
    oracle_account: Pubkey
    market_account: Pubkey
    admin_account: Pubkey
    market_vault: Pubkey
    fee_sink: Pubkey
    instances: Tuple[InstanceContext, ...] = ()

    def __post_init__(self) -> None:
        for name in (
            "program_id",
            "market_signer_account",
            "oracle_account",
            "market_account",
            "admin_account",
            "market_vault",
            "fee_sink",
        ):
            _require_pubkey(getattr(self, name), name=name)
        if not isinstance(self.signer_nonce, int) or isinstance(self.signer_nonce, bool):
            raise TypeError("signer_nonce must be an int")
        if not 0 <= self.signer_nonce <= 0xFF:
            raise ValueError(f"signer_nonce must be in [0, 255], got {self.signer_nonce}")
        instances = tuple(self.instances)
        for i, inst in enumerate(instances):
            if not isinstance(inst, InstanceContext):
                raise TypeError(f"instances[{i}] must be an InstanceContext")
        object.__setattr__(self, "instances", instances)

    def instance(self, index: int) -> InstanceContext:
        """Checked instance lookup."""
        count = len(self.instances)
        if not isinstance(index, int) or isinstance(index, bool):
            raise InvalidInstanceIndex(index, count)
        if index < 0 or index >= count:
            raise InvalidInstanceIndex(index, count)
        return self.instances[index]


@dataclass(frozen=True)
class DiscountAccount:
    """Fee-tier discount account and its owner (who must sign)."""

    owner: Pubkey
    address: Pubkey

    def __post_init__(self) -> None:
        if self.owner is None or self.address is None:
            missing = "owner" if self.owner is None else "address"
            raise MissingOptionalAccount(f"discount account {missing} is missing; both owner and address are required")
        _require_pubkey(self.owner, name="discount.owner")
        _require_pubkey(self.address, name="discount.address")


@dataclass(frozen=True)
class PositionInfo:
    """A user account holding positions, its owner, instance and side."""

    user_account: Pubkey
    user_account_owner: Pubkey
    instance_index: int
    side: PositionSide

    def __post_init__(self) -> None:
        _require_pubkey(self.user_account, name="user_account")
        _require_pubkey(self.user_account_owner, name="user_account_owner")
