"""Command-line check that the in-cluster client can reach the API server."""

import asyncio
import json
import logging
from typing import Any

from .config import Config, get_config, setup_logging
from .consts import VERSION_PATH
from .factory import create_in_cluster_client

logger = logging.getLogger("kube-bootstrap.main")


async def fetch_server_version(config: Config) -> dict[str, Any]:
    """Build the in-cluster client and GET /version from the API server.

    Returns:
        The server's version info (major, minor, gitVersion...).
    """
    async with create_in_cluster_client(config) as client:
        logger.debug(f"Fetching {VERSION_PATH} from {client.base_url}")
        version = await client.get_json(VERSION_PATH)
        logger.info(f"Connected to Kubernetes {version.get('gitVersion', 'unknown')}")
        return version


def main() -> None:
    """Main entry point."""
    config = get_config()
    setup_logging(config.log_level)
    logger.debug(f"Starting with {config!r}")

    try:
        version = asyncio.run(fetch_server_version(config))
    except Exception as e:
        logger.error(f"API server check failed: {e}")
        raise

    print(json.dumps(version, indent=2))


if __name__ == "__main__":
    main()
