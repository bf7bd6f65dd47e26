"""Derivation of the identity shared by all copies of one announcement."""

from __future__ import annotations

import json
from hashlib import sha256


def derive_group_key(sender_id: int | None, title: str, message: str) -> str:
    """Return the group key for a broadcast of ``title``/``message`` by ``sender_id``.

    The title and body are JSON encoded before hashing, so no choice of
    delimiter inside either field can make two different pairs collide.
    Identical content sent twice by the same sender yields the same key.
    """

    content = json.dumps([title, message], ensure_ascii=False, separators=(",", ":"))
    digest = sha256(content.encode("utf-8")).hexdigest()
    sender = "" if sender_id is None else str(sender_id)
    return f"{sender}:{digest}"


__all__ = ["derive_group_key"]
