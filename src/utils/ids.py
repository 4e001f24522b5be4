"""
Identifier generation
"""

import uuid
from src.utils.date_utils import now_ms


def generate_id() -> str:
    """Opaque unique id: creation timestamp plus a random suffix"""
    return f"{now_ms()}-{uuid.uuid4().hex[:9]}"
