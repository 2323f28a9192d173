"""Generated record keys."""

import uuid


def generate_id(prefix: str) -> str:
    """e.g. generate_id("BOOK-") -> "BOOK-3F9A1C2E7B04"."""
    return f"{prefix}{uuid.uuid4().hex[:12].upper()}"
