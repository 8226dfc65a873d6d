"""
Irodori Request ID Utilities
"""
import uuid
from datetime import datetime

REQUEST_ID_PREFIX = "irodori"


def generate_request_id() -> str:
    """
    Generate a unique request ID for tracing.

    Returns:
        ID of the form ``irodori-<YYYYmmddHHMMSS>-<8 hex chars>``
    """
    timestamp = datetime.now().strftime("%Y%m%d%H%M%S")
    short_uuid = uuid.uuid4().hex[:8]
    return f"{REQUEST_ID_PREFIX}-{timestamp}-{short_uuid}"


def is_request_id(value: str) -> bool:
    """Check whether a string looks like an id from generate_request_id."""
    parts = value.split("-")
    return (
        len(parts) == 3
        and parts[0] == REQUEST_ID_PREFIX
        and len(parts[1]) == 14
        and parts[1].isdigit()
        and len(parts[2]) == 8
    )
