"""Long-polling runner that feeds updates to the dispatcher."""

import asyncio
import logging
from dataclasses import dataclass, field

from pydantic import ValidationError

from lyrics_bot.adapters.telegram_client import TelegramClient
from lyrics_bot.api.telegram_models import TelegramUpdate
from lyrics_bot.services.dispatcher import UpdateDispatcher

logger = logging.getLogger(__name__)


@dataclass
class UpdatePoller:
    """Fetch updates in arrival order and handle each in its own task."""

    telegram_client: TelegramClient
    dispatcher: UpdateDispatcher
    timeout: int = 60
    retry_delay: float = 5.0
    offset: int | None = None
    _tasks: set[asyncio.Task[None]] = field(default_factory=set)

    async def poll_once(self) -> int:
        """Fetch one batch, schedule a task per update, return the batch size."""
        raw_updates = await self.telegram_client.get_updates(
            offset=self.offset, timeout=self.timeout
        )
        for raw in raw_updates:
            update_id = raw.get("update_id")
            if isinstance(update_id, int):
                self.offset = update_id + 1
            try:
                update = TelegramUpdate.model_validate(raw)
            except ValidationError:
                logger.exception("Skipping malformed update", extra={"raw": raw})
                continue
            task = asyncio.create_task(self.dispatcher.handle_update(update))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)
        return len(raw_updates)

    async def drain(self) -> None:
        """Wait for every scheduled update task to finish."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    async def run(self, stop: asyncio.Event) -> None:
        """Poll until ``stop`` is set, then wait for in-flight updates."""
        logger.info("Polling for updates")
        while not stop.is_set():
            try:
                await self.poll_once()
            except Exception:
                logger.exception("Failed to fetch updates")
                await asyncio.sleep(self.retry_delay)
        await self.drain()
