"""ASGI entrypoint for the FitCore ledger API."""

from fitcore.api.app import create_app
from fitcore.containers import build_container

app = create_app(build_container())
