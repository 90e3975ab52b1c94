"""Process entry point — pick a free port and run uvicorn."""

import logging
import socket

import uvicorn
from fastapi import FastAPI

from meteor_api.config import settings
from meteor_api.errors import NoAvailablePortError
from meteor_api.main import create_app, start_dataset_load

logger = logging.getLogger(__name__)


def is_port_free(host: str, port: int) -> bool:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        try:
            sock.bind((host, port))
        except OSError:
            return False
    return True


def find_available_port(host: str, start: int, attempts: int = 20) -> int:
    """First free port in ``start, start + 1, ...``; raises when all are taken."""
    for port in range(start, start + attempts):
        if is_port_free(host, port):
            return port
        logger.info("Port %d in use — trying %d", port, port + 1)
    raise NoAvailablePortError(start, attempts)


class MeteorServer(uvicorn.Server):
    """uvicorn server that starts the dataset load once the listener is bound."""

    def __init__(self, config: uvicorn.Config, app: FastAPI):
        super().__init__(config)
        self.meteor_app = app

    async def startup(self, sockets: list[socket.socket] | None = None) -> None:
        await super().startup(sockets=sockets)
        if self.should_exit:
            return
        start_dataset_load(self.meteor_app)


def main() -> None:
    port = find_available_port(settings.host, settings.port, settings.port_probe_attempts)
    app = create_app(settings, load_on_startup=False)
    config = uvicorn.Config(app, host=settings.host, port=port, log_level=settings.log_level.lower())
    logger.info("Server running on http://localhost:%d", port)
    MeteorServer(config, app).run()


if __name__ == "__main__":
    main()
