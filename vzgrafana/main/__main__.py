"""
Main module entry point.

Runs the API server: python -m vzgrafana.main
"""

import uvicorn

from vzgrafana.main.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "vzgrafana.main.app:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.server.reload,
        log_config=None,
    )


if __name__ == "__main__":
    main()
