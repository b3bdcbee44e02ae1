"""FastAPI application factory."""

import hmac
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Header, HTTPException, Request, status

from lyrics_bot.api.telegram_models import TelegramUpdate
from lyrics_bot.app_logging import configure_logging
from lyrics_bot.containers import AppContainer
from lyrics_bot.telegram_commands import CHAT_MENU_BUTTON, telegram_commands


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            await app.state.container.telegram_client.set_my_commands(
                telegram_commands()
            )
            await app.state.container.telegram_client.set_chat_menu_button(
                CHAT_MENU_BUTTON
            )
        except Exception:
            logger.exception("Failed to sync Telegram bot commands")
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/telegram/webhook")
    async def telegram_webhook(
        update: TelegramUpdate,
        request: Request,
        x_telegram_bot_api_secret_token: str | None = Header(default=None),
    ) -> dict[str, str]:
        """Handle Telegram webhook updates."""
        state_container: AppContainer = request.app.state.container
        expected = state_container.settings.telegram_webhook_secret
        if expected and not hmac.compare_digest(
            x_telegram_bot_api_secret_token or "", expected
        ):
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
        await state_container.dispatcher.handle_update(update)
        return {"status": "ok"}

    return app
