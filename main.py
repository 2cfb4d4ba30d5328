# =============================================================================
# main.py  —  Entry Point for the Directus MCP Server
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py        (or: directus-mcp-server)
#
# WHAT HAPPENS:
#   1. Loads .env (DIRECTUS_URL, DIRECTUS_TOKEN, ...) into the environment
#   2. Configures logging on stderr
#   3. Authenticates with the static token and probes the API by listing
#      collections.  Any failure here ends the process with status 1;
#      no tool is ever served from a half-configured server.
#   4. Builds the Dispatcher around the authenticated client
#   5. Serves the tools over stdio until the agent disconnects
# =============================================================================

import asyncio
import logging
import sys

from dotenv import load_dotenv

from cms.config import Settings, connect
from cms.dispatcher import Dispatcher
from cms.errors import ConfigurationError
from tools.mcp_server import configure_logging, create_server, serve

logger = logging.getLogger(__name__)


def main() -> None:
    load_dotenv()

    try:
        settings = Settings.from_env()
        configure_logging(settings.log_level)
        client = connect(settings)
    except ConfigurationError as e:
        configure_logging()
        logger.error("%s", e)
        sys.exit(1)

    server = create_server(Dispatcher(client))
    logger.info("Directus MCP Server running on stdio")
    try:
        asyncio.run(serve(server))
    finally:
        client.close()


# =============================================================================
# Script entry point
# =============================================================================
if __name__ == "__main__":
    main()
