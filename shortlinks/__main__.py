"""Run the URL Shortener Service with uvicorn."""

import uvicorn

from .core.config import settings


def main() -> None:
    uvicorn.run(
        "shortlinks.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
