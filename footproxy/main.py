"""Entry point for the football cache proxy."""

from __future__ import annotations

import logging
import os


def main() -> None:
    import uvicorn

    from footproxy.config import load_settings
    from footproxy.web.app import create_app

    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    settings = load_settings()
    app = create_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
