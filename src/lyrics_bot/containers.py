"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta

from supabase import create_client

from lyrics_bot.adapters.imgur_client import HttpxImgurClient, ImageHost
from lyrics_bot.adapters.supabase_catalog_repository import (
    SupabaseCatalogRepository,
)
from lyrics_bot.adapters.telegram_client import HttpxTelegramClient, TelegramClient
from lyrics_bot.adapters.telegram_file_client import (
    HttpxTelegramFileClient,
    TelegramFileClient,
)
from lyrics_bot.config import Settings, parse_user_ids
from lyrics_bot.services.authorization import AuthorizationGate
from lyrics_bot.services.browsing import BrowsingService
from lyrics_bot.services.catalog import CatalogService
from lyrics_bot.services.commands import CommandHandler
from lyrics_bot.services.dialogs import DialogService
from lyrics_bot.services.dispatcher import UpdateDispatcher
from lyrics_bot.services.media import MediaIngestionService
from lyrics_bot.services.session_store import InMemorySessionStore, SessionStore


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    telegram_client: TelegramClient
    telegram_file_client: TelegramFileClient
    image_host: ImageHost
    authorization: AuthorizationGate
    session_store: SessionStore
    catalog_service: CatalogService
    media_service: MediaIngestionService
    dialog_service: DialogService
    dispatcher: UpdateDispatcher
    close_resources: Callable[[], Awaitable[None]]


def build_services(  # noqa: PLR0913
    settings: Settings,
    telegram_client: TelegramClient,
    telegram_file_client: TelegramFileClient,
    image_host: ImageHost,
    catalog_service: CatalogService,
    session_store: SessionStore,
    close_resources: Callable[[], Awaitable[None]],
) -> AppContainer:
    """Wire services on top of already-built adapters."""
    authorization = AuthorizationGate(parse_user_ids(settings.admin_user_ids))
    media_service = MediaIngestionService(
        file_client=telegram_file_client, image_host=image_host
    )
    dialog_service = DialogService(
        session_store=session_store,
        catalog_service=catalog_service,
        media_service=media_service,
        authorization=authorization,
        environment=settings.environment,
    )
    browsing_service = BrowsingService(catalog_service)
    command_handler = CommandHandler(
        browsing_service=browsing_service,
        dialog_service=dialog_service,
        catalog_service=catalog_service,
        media_service=media_service,
        authorization=authorization,
        environment=settings.environment,
    )
    dispatcher = UpdateDispatcher(
        telegram_client=telegram_client,
        browsing_service=browsing_service,
        dialog_service=dialog_service,
        command_handler=command_handler,
        environment=settings.environment,
    )
    return AppContainer(
        settings=settings,
        telegram_client=telegram_client,
        telegram_file_client=telegram_file_client,
        image_host=image_host,
        authorization=authorization,
        session_store=session_store,
        catalog_service=catalog_service,
        media_service=media_service,
        dialog_service=dialog_service,
        dispatcher=dispatcher,
        close_resources=close_resources,
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    catalog_service = CatalogService(
        SupabaseCatalogRepository(
            supabase_client, table=resolved_settings.catalog_table
        )
    )
    session_store = InMemorySessionStore(
        idle_timeout=timedelta(minutes=resolved_settings.session_idle_timeout_minutes)
    )
    telegram_client = HttpxTelegramClient.create(resolved_settings.telegram_bot_token)
    telegram_file_client = HttpxTelegramFileClient.create(
        resolved_settings.telegram_bot_token
    )
    image_host = HttpxImgurClient.create(resolved_settings.imgur_client_id)

    async def close_resources() -> None:
        await telegram_client.close()
        await telegram_file_client.close()
        await image_host.close()

    return build_services(
        settings=resolved_settings,
        telegram_client=telegram_client,
        telegram_file_client=telegram_file_client,
        image_host=image_host,
        catalog_service=catalog_service,
        session_store=session_store,
        close_resources=close_resources,
    )
