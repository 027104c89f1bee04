"""ASGI entrypoint for the RewindPix web app."""

from rewindpix.api.app import create_app
from rewindpix.containers import build_container

app = create_app(build_container())
