"""Entry point for running the application as a module."""

import uvicorn

from taskstation.config import settings


def main() -> None:
    """Run the application server."""
    uvicorn.run(
        "taskstation.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
