"""Submit effect standing in for a network call."""

from __future__ import annotations

import asyncio

from schemaforms import logger


class DelayedSubmitEffect:
    """Wait for a fixed delay, log the submitted field ids and succeed."""

    def __init__(self, delay: float = 1.0) -> None:
        self._delay = delay
        self.submissions: list[dict[str, str]] = []

    async def __call__(self, values: dict[str, str]) -> None:
        await asyncio.sleep(self._delay)
        self.submissions.append(dict(values))
        logger.info("Form submitted", extra={"field_ids": sorted(values)})
