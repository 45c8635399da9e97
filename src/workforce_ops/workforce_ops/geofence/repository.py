from __future__ import annotations

from typing import Protocol, Sequence

from .model import OfficeLocation


class OfficeRepository(Protocol):
    def list_active(self) -> Sequence[OfficeLocation]:
        raise NotImplementedError
