# -*- coding: utf-8 -*-
"""
Entry point to run the service via python -m rich_content.
"""
import uvicorn

from rich_content.config import settings


def main():
    """Start the Uvicorn server."""
    uvicorn.run(
        "rich_content.api:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=False,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
