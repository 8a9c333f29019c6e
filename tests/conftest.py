from __future__ import annotations

from typing import Callable

import pytest
from solders.pubkey import Pubkey

from perp_requests import InstanceContext, MarketContext


def _key(n: int) -> Pubkey:
    return Pubkey(bytes([n]) * 32)


@pytest.fixture
def key() -> Callable[[int], Pubkey]:
    """Deterministic test identity: 32 copies of byte `n`."""
    return _key


@pytest.fixture
def make_market() -> Callable[..., MarketContext]:
    """
    Market whose instance i has `page_counts[i]` pages.

    Keys: program 1, signer 2, oracle 3, market 4, admin 5, vault 6, fee sink 7;
    instance/page keys are allocated from 100 upwards in declaration order.
    """

    def _make(*page_counts: int) -> MarketContext:
        next_key = 100
        instances = []
        for count in page_counts:
            instance_account = _key(next_key)
            next_key += 1
            pages = []
            for _ in range(count):
                pages.append(_key(next_key))
                next_key += 1
            instances.append(InstanceContext(instance_account=instance_account, memory_pages=tuple(pages)))
        return MarketContext(
            program_id=_key(1),
            signer_nonce=254,
            market_signer_account=_key(2),
            oracle_account=_key(3),
            market_account=_key(4),
            admin_account=_key(5),
            market_vault=_key(6),
            fee_sink=_key(7),
            instances=tuple(instances),
        )

    return _make


@pytest.fixture
def market(make_market) -> MarketContext:
    # instance 0 = key(100), pages key(101), key(102)
    return make_market(2)
