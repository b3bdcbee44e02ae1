"""Process entry point that runs the bot with long polling."""

import asyncio
import logging
import signal

from lyrics_bot.app_logging import configure_logging
from lyrics_bot.containers import build_container
from lyrics_bot.polling import UpdatePoller
from lyrics_bot.telegram_commands import CHAT_MENU_BUTTON, telegram_commands

logger = logging.getLogger(__name__)


async def run() -> None:
    """Build dependencies and poll until interrupted."""
    container = build_container()
    configure_logging(container.settings.log_level)
    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, stop.set)
    try:
        await container.telegram_client.set_my_commands(telegram_commands())
        await container.telegram_client.set_chat_menu_button(CHAT_MENU_BUTTON)
    except Exception:
        logger.exception("Failed to sync Telegram bot commands")
    poller = UpdatePoller(
        telegram_client=container.telegram_client,
        dispatcher=container.dispatcher,
        timeout=container.settings.polling_timeout_seconds,
    )
    try:
        await poller.run(stop)
    finally:
        await container.close_resources()


def main() -> None:
    """Run the lyrics bot."""
    configure_logging()
    asyncio.run(run())


if __name__ == "__main__":
    main()
