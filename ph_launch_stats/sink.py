from __future__ import annotations

import asyncio
from typing import Any, Protocol

from crawlee.storages import Dataset

from .errors import SinkError
from .record import PostRecord


class RecordSink(Protocol):
    async def emit(self, record: PostRecord) -> None: ...


class MemorySink:
    """Keeps emitted records in process; used for offline extraction and tests."""

    def __init__(self) -> None:
        self._items: list[dict[str, Any]] = []
        self._lock = asyncio.Lock()

    async def emit(self, record: PostRecord) -> None:
        async with self._lock:
            self._items.append(record.to_item())

    @property
    def items(self) -> list[dict[str, Any]]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)


class DatasetSink:
    """
    Appends records to a crawlee Dataset.

    Outside the Apify platform this is the local default dataset under
    `storage/datasets`, the same one `run --out` exports; inside an Actor it
    is the run's dataset. Appends are serialized so concurrent page handlers
    never race on the underlying storage client.
    """

    def __init__(self, *, dataset: Dataset | None = None) -> None:
        self._dataset = dataset
        self._lock = asyncio.Lock()
        self._count = 0

    @property
    def count(self) -> int:
        return self._count

    async def _open(self) -> Dataset:
        if self._dataset is None:
            self._dataset = await Dataset.open()
        return self._dataset

    async def emit(self, record: PostRecord) -> None:
        async with self._lock:
            try:
                dataset = await self._open()
                await dataset.push_data(record.to_item())
            except Exception as e:
                raise SinkError(f"Failed to append record for {record.ph_url}: {e}") from e
            self._count += 1
