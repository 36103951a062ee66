"""Fixture payloads for POST/PUT scenarios."""

import asyncio
import random
import time
from typing import Any, Dict


def generate_test_data() -> Dict[str, Any]:
    """Build a fresh post-like record.

    Values are random on every call; tests should assert that two records
    differ, never that they match anything fixed.
    """
    return {
        "title": f"Test Title {int(time.time() * 1000)}",
        "body": f"Test body content {random.random()}",
        "userId": random.randint(1, 10),
        "id": random.randint(1, 1000),
    }


async def sleep(ms: float) -> None:
    """Pause the current task for ``ms`` milliseconds."""
    await asyncio.sleep(ms / 1000)
