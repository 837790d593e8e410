from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Mapping, Optional, Protocol, Sequence

from .model import Writer

if TYPE_CHECKING:
    from ..stats.model import WriterStats


class WriterRepository(Protocol):
    def get_by_id(self, writer_id: int) -> Optional[Writer]:
        raise NotImplementedError

    def get_by_phone(self, phone: str) -> Optional[Writer]:
        raise NotImplementedError

    def get_many(self, writer_ids: Sequence[int]) -> Mapping[int, Writer]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Writer]:
        raise NotImplementedError

    def max_phone_with_prefix(self, prefix: str) -> Optional[str]:
        raise NotImplementedError

    def create(self, writer: Writer) -> int:
        """Insert and return the auto-assigned id (``writer.writer_id`` is ignored)."""

        raise NotImplementedError

    def update(self, writer_id: int, fields: Mapping[str, Any]) -> bool:
        raise NotImplementedError

    def update_stats(self, writer_id: int, stats: "WriterStats") -> bool:
        raise NotImplementedError

    def touch_last_active(self, writer_id: int, when: datetime) -> bool:
        raise NotImplementedError

    def delete_by_id(self, writer_id: int) -> bool:
        """Delete the writer; assignments keep existing with writer_id set to NULL."""

        raise NotImplementedError

    def upsert_many(self, writers: Sequence[Writer]) -> int:
        raise NotImplementedError

    def delete_all(self) -> int:
        raise NotImplementedError
