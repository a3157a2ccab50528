from datetime import datetime, timezone
from typing import Optional

from event_proxy.schemas.event import ClientEvent, OutboundEvent


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def transform(e: ClientEvent, source: str, now: Optional[datetime] = None) -> OutboundEvent:
    """
    Build the downstream event from a client event.
    The clock is read once; `timestamp` is that instant in the local zone
    and `utctimestamp` the same instant in UTC.
    """
    instant = now if now is not None else now_utc()
    utc = instant.astimezone(timezone.utc)

    return OutboundEvent(
        category=e.category,
        hostname=e.hostname,
        severity=e.severity,
        process=e.process,
        summary=e.summary,
        tags=list(e.tags),
        details=dict(e.details),
        source=source,
        timestamp=utc.astimezone(),
        utctimestamp=utc,
    )
