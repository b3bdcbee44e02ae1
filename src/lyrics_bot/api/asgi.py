"""ASGI entrypoint for webhook deployments."""

from lyrics_bot.api.app import create_app
from lyrics_bot.containers import build_container

app = create_app(build_container())
