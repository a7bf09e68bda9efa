"""Run the Storefront API with uvicorn: ``python -m storefront_api.server``."""

import uvicorn

from storefront_api.server.core.config import settings


def main() -> None:
    uvicorn.run(
        "storefront_api.server.main:app",
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
