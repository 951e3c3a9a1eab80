from __future__ import annotations

import argparse

import uvicorn

from customer_api.config import get_settings
from customer_api.observability.logging import LOG_LEVELS, configure_logging


def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="In-memory customer CRUD service")
    parser.add_argument("--host", default=settings.host, help="Interface to bind")
    parser.add_argument("--port", type=int, default=settings.port, help="Port to listen on")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, default=settings.log_level, help="Root log level")
    args = parser.parse_args()

    configure_logging(args.log_level)
    # log_config=None keeps uvicorn from replacing the handlers configured above.
    uvicorn.run("customer_api.main:app", host=args.host, port=args.port, log_config=None)


if __name__ == "__main__":
    main()
