"""
Segment-ordered account list builder.

A request's account list is made of typed segments that always appear in the
same order:

    fixed prefix -> instance pages -> discount pair -> referral

The engine indexes the prefix positionally and reads the optional segments
from the tail, so the order is enforced here rather than left to each caller.
"""

from __future__ import annotations

from enum import IntEnum
from typing import List, Optional

from solders.instruction import AccountMeta
from solders.pubkey import Pubkey

from ..errors import AccountOrderError, MissingOptionalAccount
from .context import DiscountAccount, InstanceContext


class Segment(IntEnum):
    PREFIX = 0
    PAGES = 1
    DISCOUNT = 2
    REFERRAL = 3


class AccountListBuilder:
    def __init__(self) -> None:
        self._metas: List[AccountMeta] = []
        self._segment = Segment.PREFIX

    def __len__(self) -> int:
        return len(self._metas)

    def _enter(self, segment: Segment) -> None:
        if segment < self._segment or (segment == self._segment and segment >= Segment.DISCOUNT):
            if segment >= Segment.DISCOUNT:
                raise MissingOptionalAccount(
                    f"{segment.name.lower()} segment cannot follow {self._segment.name.lower()}; "
                    "the discount pair must precede the referral and each appears at most once"
                )
            raise AccountOrderError(
                f"{segment.name.lower()} account appended after the {self._segment.name.lower()} segment"
            )
        self._segment = segment

    def _push(self, pubkey: Pubkey, *, writable: bool, signer: bool) -> None:
        if not isinstance(pubkey, Pubkey):
            raise TypeError(f"account must be a Pubkey, got {type(pubkey).__name__}")
        self._metas.append(AccountMeta(pubkey=pubkey, is_signer=signer, is_writable=writable))

    # Fixed prefix

    def writable(self, pubkey: Pubkey, *, signer: bool = False) -> "AccountListBuilder":
        self._enter(Segment.PREFIX)
        self._push(pubkey, writable=True, signer=signer)
        return self

    def readonly(self, pubkey: Pubkey, *, signer: bool = False) -> "AccountListBuilder":
        self._enter(Segment.PREFIX)
        self._push(pubkey, writable=False, signer=signer)
        return self

    # Variable segments

    def pages(self, instance: InstanceContext) -> "AccountListBuilder":
        """One writable reference per memory page, in stored order."""
        self._enter(Segment.PAGES)
        for page in instance.memory_pages:
            self._push(page, writable=True, signer=False)
        return self

    def discount(self, discount: Optional[DiscountAccount]) -> "AccountListBuilder":
        if discount is None:
            return self
        if not isinstance(discount, DiscountAccount):
            raise MissingOptionalAccount(
                f"discount must be a DiscountAccount with owner and address, got {type(discount).__name__}"
            )
        self._enter(Segment.DISCOUNT)
        self._push(discount.address, writable=False, signer=False)
        self._push(discount.owner, writable=False, signer=True)
        return self

    def referrer(self, referrer: Optional[Pubkey]) -> "AccountListBuilder":
        if referrer is None:
            return self
        self._enter(Segment.REFERRAL)
        self._push(referrer, writable=True, signer=False)
        return self

    def optional(
        self,
        discount: Optional[DiscountAccount],
        referrer: Optional[Pubkey],
    ) -> "AccountListBuilder":
        """Discount pair (if any) followed by the referral (if any)."""
        return self.discount(discount).referrer(referrer)

    def build(self) -> List[AccountMeta]:
        return list(self._metas)
