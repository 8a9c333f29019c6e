"""Plain-data view of a built request, for logs and audit trails."""

from __future__ import annotations

from typing import Any, Dict

from solders.instruction import Instruction


def instruction_to_dict(ix: Instruction) -> Dict[str, Any]:
    return {
        "program_id": str(ix.program_id),
        "accounts": [
            {
                "pubkey": str(meta.pubkey),
                "is_signer": bool(meta.is_signer),
                "is_writable": bool(meta.is_writable),
            }
            for meta in ix.accounts
        ],
        "data": "0x" + bytes(ix.data).hex(),
    }
