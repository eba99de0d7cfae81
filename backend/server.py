"""Run the API with uvicorn.

Usage:
    python -m backend.server
"""
import uvicorn

from backend.core import config


def main() -> None:
    uvicorn.run(
        'backend.main:app',
        host=config.HOST,
        port=config.PORT,
        log_level=config.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
