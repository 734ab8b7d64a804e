"""
Command line entry point for running a service or creating its tables
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from dotenv import load_dotenv

# Load environment variables before settings are read
load_dotenv()

from crud_backend.config import settings  # noqa: E402
from crud_backend.config.settings import ServiceVariant, parse_service_variant  # noqa: E402
from crud_backend.database.connection import Database  # noqa: E402
from crud_backend.database.schema import ensure_schema  # noqa: E402

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="crud-backend", description="Users / posts CRUD backends")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP service")
    serve.add_argument("--service", type=parse_service_variant, default=settings.SERVICE_VARIANT,
                       help="crud (users only) or relations (users + posts)")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=settings.PORT)

    init_schema = subparsers.add_parser("init-schema", help="Create missing tables and exit")
    init_schema.add_argument("--service", type=parse_service_variant, default=settings.SERVICE_VARIANT)

    return parser


async def _init_schema(variant: ServiceVariant) -> None:
    database = Database.from_settings()
    await database.connect()
    try:
        await ensure_schema(database.pool, variant)
    finally:
        await database.close()


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=settings.LOG_LEVEL)
    args = build_parser().parse_args(argv)

    if args.command == "init-schema":
        asyncio.run(_init_schema(args.service))
        return 0

    import uvicorn
    from crud_backend.app import create_app

    logger.info(f"Starting '{args.service.value}' service on port {args.port}")
    uvicorn.run(create_app(args.service), host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
