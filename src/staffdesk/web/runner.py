"""Uvicorn server runner and the ``staffdesk`` console entry point."""

import copy

import structlog
import uvicorn
from uvicorn.config import LOGGING_CONFIG

from staffdesk.app import App
from staffdesk.config import Config
from staffdesk.logging import setup_logging
from staffdesk.web.server import create_fastapi_app

logger = structlog.get_logger(__name__)


def run_server(app: App, config: Config) -> None:
    """Run the Uvicorn server with access lines matching the app's log format."""
    fastapi_app = create_fastapi_app(app, config)

    log_config = copy.deepcopy(LOGGING_CONFIG)
    log_config["formatters"]["access"]["fmt"] = '%(asctime)s - "%(request_line)s" %(status_code)s'
    log_config["formatters"]["default"]["fmt"] = "%(asctime)s - %(levelname)s - %(message)s"

    logger.info(
        "server_starting",
        host=config.host,
        port=config.port,
        records_api_url=config.records_api_url,
        git_commit_hash=config.git_commit_hash,
    )
    uvicorn.run(fastapi_app, host=config.host, port=config.port, log_config=log_config, access_log=True)


def main() -> None:
    """Read STAFFDESK_* settings, configure logging and serve until interrupted."""
    config = Config()
    setup_logging(config.debug)
    run_server(App(config), config)


if __name__ == "__main__":
    main()
