import logging
import os
import socket

from fs_browser.logging_config import configure_logging
from fs_browser.ui.dash_app import create_dash_app

configure_logging()
logger = logging.getLogger("fs_browser.app")

app = create_dash_app(os.getenv("FS_BROWSER_CONFIG_ROOT", "config"))
server = app.server


def pick_port(host: str, preferred: int, attempts: int = 20) -> int:
    """First port from `preferred` onwards that can be bound on `host`."""
    for port in range(preferred, preferred + attempts):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            try:
                s.bind((host, port))
            except OSError:
                continue
            return port
    return preferred


def main() -> None:
    host = os.getenv("HOST", "127.0.0.1")
    preferred = int(os.getenv("PORT", "8050"))
    port = pick_port(host, preferred)
    if port != preferred:
        logger.warning("Port busy, using next free port", extra={"preferred": preferred, "port": port})

    logger.info("Starting food supply dashboard", extra={"host": host, "port": port})
    app.run(host=host, port=port, debug=os.getenv("DEBUG", "0") == "1")


if __name__ == "__main__":
    main()
