from __future__ import annotations

import argparse
from typing import Sequence

import uvicorn

from catalog.api.gateway import create_gateway
from catalog.config.settings import settings, split_endpoint
from catalog.infrastructure.catalog_client import CatalogClient
from catalog.logging_config import get_logger


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Serve the public HTTP/JSON catalog gateway")
    p.add_argument(
        "--api-endpoint",
        default=settings.api_endpoint,
        help="host:port to listen on (default: %(default)s)",
    )
    p.add_argument(
        "--racing-endpoint",
        default=settings.racing_endpoint,
        help="Racing RPC server endpoint (default: %(default)s)",
    )
    p.add_argument(
        "--sports-endpoint",
        default=settings.sports_endpoint,
        help="Sports RPC server endpoint (default: %(default)s)",
    )
    p.add_argument(
        "--timeout",
        type=float,
        default=settings.upstream_timeout,
        help="Upstream call timeout in seconds (default: %(default)s)",
    )
    return p


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logger = get_logger()

    try:
        host, port = split_endpoint(args.api_endpoint)
        racing = CatalogClient(args.racing_endpoint, timeout=args.timeout)
        sports = CatalogClient(args.sports_endpoint, timeout=args.timeout)
    except RuntimeError as exc:
        logger.error("Failed running api server", extra={"error": str(exc)})
        return 1

    app = create_gateway(racing, sports)
    logger.info(
        "API server listening",
        extra={
            "endpoint": args.api_endpoint,
            "racing": racing.base_url,
            "sports": sports.base_url,
        },
    )
    uvicorn.run(app, host=host, port=port, log_config=None)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
