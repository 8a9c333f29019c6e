from __future__ import annotations

import json

from perp_requests import collect_garbage, instruction_to_dict


def test_instruction_to_dict(market, key) -> None:
    d = instruction_to_dict(collect_garbage(market, 0, 5, key(20)))
    assert d["program_id"] == str(market.program_id)
    assert d["data"] == "0x08000500000000000000"
    assert d["accounts"][0] == {"pubkey": "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA", "is_signer": False, "is_writable": False}
    assert len(d["accounts"]) == 8


def test_instruction_to_dict_is_json_serialisable(market, key) -> None:
    a = json.dumps(instruction_to_dict(collect_garbage(market, 0, 5, key(20))), sort_keys=True)
    b = json.dumps(instruction_to_dict(collect_garbage(market, 0, 5, key(20))), sort_keys=True)
    assert a == b
