"""Run the service with uvicorn: ``python -m link_saver``."""

import uvicorn

from link_saver.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "link_saver.app:app",
        host="0.0.0.0",
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
