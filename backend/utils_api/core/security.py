from __future__ import annotations

import hmac
from datetime import datetime, timezone


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def constant_time_compare(a: str, b: str) -> bool:
    return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))
