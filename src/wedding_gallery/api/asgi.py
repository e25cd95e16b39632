"""ASGI entrypoint for the wedding gallery API."""

from wedding_gallery.api.app import create_app
from wedding_gallery.containers import build_container

app = create_app(build_container())
