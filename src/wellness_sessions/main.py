"""Command-line entrypoint that serves the API with uvicorn."""

import uvicorn

from wellness_sessions.config import Settings


def main() -> None:
    """Run the API server on the configured host and port."""
    settings = Settings()
    uvicorn.run(
        "wellness_sessions.api.asgi:app",
        host=settings.host,
        port=settings.port,
        reload=settings.environment == "local",
    )


if __name__ == "__main__":
    main()
