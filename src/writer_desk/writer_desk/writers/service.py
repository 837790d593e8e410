from __future__ import annotations

from dataclasses import replace
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.payload import filter_payload
from ..common.validators import is_valid_phone, require_non_empty
from ..core.constants import PHONE_DIGITS, PLACEHOLDER_PHONE_PREFIX
from ..core.enums import AvailabilityStatus
from ..core.exceptions import NotFoundError, ValidationError
from .model import Writer
from .repository import WriterRepository
from .schema import WRITER_FIELDS


class WriterService:
    """Use case: manage writers (admin)."""

    def __init__(self, writers: WriterRepository):
        self._writers = writers

    def list_writers(self) -> Sequence[Writer]:
        return self._writers.list_all()

    def get_writer(self, writer_id: int) -> Writer:
        writer = self._writers.get_by_id(writer_id)
        if not writer:
            raise NotFoundError("Writer not found")
        return writer

    def next_placeholder_phone(self) -> str:
        """0000000001, 0000000002, ... one past the highest stored placeholder."""

        last = self._writers.max_phone_with_prefix(PLACEHOLDER_PHONE_PREFIX)
        next_number = 1
        if last:
            try:
                next_number = int(last) + 1
            except ValueError:
                next_number = 1
        return str(next_number).zfill(PHONE_DIGITS)

    def resolve_phone(self, phone: Optional[str], *, writer_id: Optional[int] = None) -> str:
        if not is_valid_phone(phone):
            return self.next_placeholder_phone()

        owner = self._writers.get_by_phone(phone)
        if owner and owner.writer_id != writer_id:
            raise ValidationError("Phone number already registered")
        return phone

    def create_writer(self, payload: Mapping[str, Any]) -> Writer:
        fields = filter_payload(payload, WRITER_FIELDS)
        fields["name"] = require_non_empty(fields.get("name"), "name")
        self._check_availability(fields)
        fields["phone"] = self.resolve_phone(fields.get("phone"))

        if fields.get("rating") is None:
            fields.pop("rating", None)

        writer = Writer(writer_id=0, last_active=now_local(), **fields)
        writer_id = self._writers.create(writer)
        return self.get_writer(writer_id)

    def update_writer(self, writer_id: int, payload: Mapping[str, Any]) -> Writer:
        self.get_writer(writer_id)

        fields = filter_payload(payload, WRITER_FIELDS)
        if "name" in fields:
            fields["name"] = require_non_empty(fields["name"], "name")
        self._check_availability(fields)
        if "phone" in fields:
            fields["phone"] = self.resolve_phone(fields["phone"], writer_id=writer_id)

        if not self._writers.update(writer_id, fields):
            raise NotFoundError("Writer not found")
        return self.get_writer(writer_id)

    def delete_writer(self, writer_id: int) -> None:
        if not self._writers.delete_by_id(writer_id):
            raise NotFoundError("Writer not found")

    def normalize_for_import(self, writer: Writer, *, taken: set[str]) -> Writer:
        """Give imported writers with bad or clashing phones a fresh placeholder."""

        phone = writer.phone
        if not is_valid_phone(phone) or phone in taken:
            phone = self.next_placeholder_phone()
            while phone in taken:
                phone = str(int(phone) + 1).zfill(PHONE_DIGITS)
        taken.add(phone)
        return replace(writer, phone=phone)

    @staticmethod
    def _check_availability(fields: dict) -> None:
        if "availability_status" not in fields:
            return
        try:
            fields["availability_status"] = AvailabilityStatus(fields["availability_status"]).value
        except ValueError:
            raise ValidationError("Invalid availabilityStatus")
