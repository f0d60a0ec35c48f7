import os
import sys
import socket
import logging

import uvicorn

# SET DATABASE_URL BEFORE building the app.
# Default to a SQLite file next to this script instead of PostgreSQL.
if not os.getenv("DATABASE_URL"):
    if getattr(sys, 'frozen', False):
        # Running as compiled executable
        base_dir = os.path.dirname(sys.executable)
    else:
        base_dir = os.path.dirname(os.path.abspath(__file__))

    db_path = os.path.join(base_dir, "mission_control.db")
    # SQLite URL format: sqlite:///absolute/path/to/file.db (3 slashes for absolute)
    os.environ["DATABASE_URL"] = f"sqlite:///{db_path}"

from mission_control.config import Settings
from mission_control.logging_setup import configure_logging
from mission_control.main import build_app

log = logging.getLogger("mission_control.start")


def find_free_port(start_port=8000, max_attempts=10):
    """Find a free port starting from start_port"""
    for port in range(start_port, start_port + max_attempts):
        try:
            with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
                s.bind(('127.0.0.1', port))
                return port
        except OSError:
            continue
    raise RuntimeError(f"Could not find a free port in range {start_port}-{start_port + max_attempts}")


if __name__ == "__main__":
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    log.info("using database %s", settings.database_url)

    try:
        port = find_free_port(8000)
        if port != 8000:
            log.warning("port 8000 in use, using port %d instead", port)
    except RuntimeError:
        log.error("no free ports available")
        sys.exit(1)

    uvicorn.run(build_app(settings), host="127.0.0.1", port=port, reload=False)
