"""ASGI entrypoint for the Fotograf-IA API."""

from fotografia.api.app import create_app
from fotografia.containers import build_container

app = create_app(build_container())
