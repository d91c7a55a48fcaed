"""FastAPI application entry point."""

from fastapi import FastAPI

from common.cli_helpers import setup_logging
from common.config import get_config
from news_api.routers import events, health, news

app = FastAPI(
    title="Media Insights API",
    description="Triggers news ingestion and analysis runs",
    version="1.0.0",
)

# Register routers
app.include_router(health.router)
app.include_router(news.router)
app.include_router(events.router)


@app.get("/")
async def root():
    """API root - returns basic info."""
    return {
        "name": "Media Insights API",
        "version": "1.0.0",
        "docs": "/docs",
    }


def main():
    """Run the API server."""
    import uvicorn

    setup_logging()
    config = get_config()
    uvicorn.run(
        "news_api.main:app",
        host=config.server.host,
        port=config.server.port,
    )


if __name__ == "__main__":
    main()
