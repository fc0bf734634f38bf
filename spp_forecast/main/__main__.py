"""
Main module entry point.

Runs the API server: python -m spp_forecast.main
"""

import uvicorn

from spp_forecast.main.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "spp_forecast.main.app:app",
        host=settings.ge.host,
        port=settings.ge.port,
        reload=settings.ge.reload,
        log_config=None,
    )


if __name__ == "__main__":
    main()
