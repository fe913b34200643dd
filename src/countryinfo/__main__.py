"""Run the service with uvicorn: ``python -m countryinfo``."""

import uvicorn

from countryinfo.adapters.frameworks.fastapi import create_app
from countryinfo.config import Settings


def main() -> None:
    settings = Settings.from_env()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
