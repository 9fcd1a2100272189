"""ASGI entrypoint for the PantryPal maps proxy."""

import uvicorn

from pantrypal.api.app import create_app
from pantrypal.containers import build_proxy_container

container = build_proxy_container()
app = create_app(container)


def run() -> None:
    """Serve the proxy with uvicorn on the configured port."""
    uvicorn.run(app, host="0.0.0.0", port=container.settings.port)  # noqa: S104
