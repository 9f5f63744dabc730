"""
Run the API server:

  python -m usersapi

Listens on HOST:PORT from the environment (default 0.0.0.0:3000).
"""

import uvicorn

from usersapi.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "usersapi.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
