"""
In-memory payment record store.

Records are keyed by the gateway transaction reference and live for the
process lifetime; nothing is persisted across restarts. Every write swaps in a
new immutable PaymentRecord under a lock, so concurrent readers see either the
old or the new record, never a partial one. Last write wins.
"""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from typing import Callable, Dict, Optional

from src.integrations.contracts.payments import PaymentRecord, utcnow


class PaymentStore:
    def __init__(self, ttl_seconds: Optional[int] = None, clock: Callable[[], float] = time.monotonic) -> None:
        self._records: Dict[str, PaymentRecord] = {}
        # reference -> monotonic time of last write, oldest first; only used for TTL eviction
        self._written_at: OrderedDict[str, float] = OrderedDict()
        self._lock = threading.Lock()
        self._ttl_seconds = ttl_seconds
        self._clock = clock

    def get(self, reference: str) -> Optional[PaymentRecord]:
        with self._lock:
            self._evict_expired()
            return self._records.get(reference)

    def create(self, reference: str, status: str) -> PaymentRecord:
        """Create or overwrite the record for reference, stamping createdAt."""
        record = PaymentRecord(status=status, created_at=utcnow())
        with self._lock:
            self._put(reference, record)
        return record

    def upsert_status(self, reference: str, status: str) -> PaymentRecord:
        """Overwrite only the status; a missing record is created without createdAt."""
        with self._lock:
            self._evict_expired()
            existing = self._records.get(reference)
            if existing is None:
                record = PaymentRecord(status=status)
            else:
                record = PaymentRecord(status=status, created_at=existing.created_at)
            self._put(reference, record)
        return record

    def __len__(self) -> int:
        with self._lock:
            self._evict_expired()
            return len(self._records)

    def ping(self) -> bool:
        return True

    # --- Internals (caller holds the lock) -------------------------------------

    def _put(self, reference: str, record: PaymentRecord) -> None:
        self._records[reference] = record
        self._written_at[reference] = self._clock()
        self._written_at.move_to_end(reference)

    def _evict_expired(self) -> None:
        if not self._ttl_seconds:
            return
        cutoff = self._clock() - self._ttl_seconds
        while self._written_at:
            reference, written_at = next(iter(self._written_at.items()))
            if written_at >= cutoff:
                break
            self._written_at.popitem(last=False)
            self._records.pop(reference, None)
