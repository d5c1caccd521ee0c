import logging
import socket
from typing import Optional

import uvicorn

from amortizer.config import Settings, configure_logging, load_settings
from amortizer.main import app

logger = logging.getLogger(__name__)


def is_port_free(port: int, host: str = "127.0.0.1") -> bool:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        try:
            sock.bind((host, port))
        except OSError:
            return False
    return True


def pick_unused_port(host: str = "127.0.0.1") -> int:
    """Pide al sistema operativo un puerto libre."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind((host, 0))
        return sock.getsockname()[1]


def select_port(settings: Settings) -> int:
    """Puerto preferido si está libre; si no, cualquier puerto libre (si se permite)."""
    if is_port_free(settings.port, settings.host):
        return settings.port
    if not settings.port_fallback:
        raise RuntimeError(f"El puerto {settings.port} está ocupado en {settings.host}")
    port = pick_unused_port(settings.host)
    logger.warning("Port %s is busy on %s, falling back to %s", settings.port, settings.host, port)
    return port


def run(settings: Settings) -> None:
    port = select_port(settings)
    address = f"{settings.host}:{port}"
    print(f"Server Running at {address}")
    logger.info("Serving amortization API on %s", address)
    uvicorn.run(app, host=settings.host, port=port, log_level=settings.log_level.lower())


def main(settings: Optional[Settings] = None) -> None:
    settings = settings or load_settings()
    configure_logging(settings.log_level)
    run(settings)


if __name__ == "__main__":
    main()
