"""ASGI entrypoint for the dashboard API."""

from videosia.api.app import create_app
from videosia.containers import build_container

app = create_app(build_container())
