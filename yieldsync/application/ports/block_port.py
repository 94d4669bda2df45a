from __future__ import annotations

from typing import Protocol


class BlockPort(Protocol):
    async def get_block_number(self) -> int:
        ...
