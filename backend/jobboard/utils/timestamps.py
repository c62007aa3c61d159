from datetime import datetime, timezone


def now_iso() -> str:
    # Microsecond precision keeps lexical order equal to insertion order.
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")
