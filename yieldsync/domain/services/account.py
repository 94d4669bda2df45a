from __future__ import annotations

import re

from yieldsync.domain.exceptions import InvalidAccountError


_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


def normalize_account(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    account = value.strip()
    if not _ADDRESS_RE.match(account):
        raise InvalidAccountError("account must be a 0x-prefixed 20-byte hex address.")
    return account.lower()
