"""Entry point for launching the media helper with Uvicorn."""
import logging

import uvicorn

from .app import create_app
from .settings import HelperSettings


def main() -> None:
    """Start the webserver and the popular media refresh loop."""

    settings = HelperSettings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
