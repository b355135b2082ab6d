"""Audit trail: one log line per mutating or admin API operation."""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

audit_logger = logging.getLogger("app.audit")


class AuditRecord:
    def __init__(self, event: str, user_id: Optional[str]):
        self.event = event
        self.user_id = user_id or "anonymous"
        self.status = "fail"
        self.meta: Dict[str, Any] = {}

    def add_meta(self, key: str, value: Any) -> None:
        self.meta[key] = value

    def success(self) -> None:
        self.status = "success"

    def render(self) -> str:
        meta = " ".join(f"{k}={v}" for k, v in self.meta.items())
        return f"event={self.event} user={self.user_id} status={self.status} {meta}".rstrip()


@asynccontextmanager
async def audit(event: str, user_id: Optional[str], **meta: Any) -> AsyncIterator[AuditRecord]:
    """Yield a record that defaults to ``fail`` and is logged on exit."""
    record = AuditRecord(event, user_id)
    for key, value in meta.items():
        record.add_meta(key, value)
    try:
        yield record
    finally:
        audit_logger.info(record.render())
