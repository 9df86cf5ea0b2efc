"""Run the API with uvicorn: `python -m storefront` (binds BACKEND_HOST:BACKEND_PORT)."""

import uvicorn

from storefront.config import settings


def main() -> None:
    uvicorn.run(
        "storefront.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
