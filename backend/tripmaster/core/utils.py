"""
Utility functions for the application.
"""
from typing import Any, Dict
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
import secrets
import time


def utcnow() -> datetime:
    """Naive UTC timestamp, matching how DateTime columns are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def generate_id() -> str:
    """
    Generate a resource id from the current time in milliseconds.
    A short random suffix keeps ids created in the same millisecond apart.
    """
    return f"{int(time.time() * 1000)}{secrets.token_hex(2)}"


def coerce_decimal(value: Any) -> Decimal:
    """Convert value to Decimal; anything non-numeric becomes 0."""
    if value is None or isinstance(value, bool):
        return Decimal(0)
    try:
        result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return Decimal(0)
    if not result.is_finite():
        return Decimal(0)
    return result


def join_tel(value: Any) -> Any:
    """Phone numbers may come as a list; store them semicolon-joined."""
    if isinstance(value, (list, tuple)):
        return ";".join(str(v) for v in value if v not in (None, ""))
    if value is None or isinstance(value, str):
        return value
    return str(value)


def format_error(message: str, details: Any = None) -> Dict[str, Any]:
    """Format error response."""
    response = {"error": message}
    if details:
        response["details"] = details
    return response
