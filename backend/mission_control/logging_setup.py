import logging

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Install (or replace) the mission_control stream handler on the root logger."""
    root = logging.getLogger()
    root.setLevel(level.upper())

    # avoid duplicate handlers when uvicorn reloads
    for h in list(root.handlers):
        if getattr(h, "_mission_control", False):
            root.removeHandler(h)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._mission_control = True
    root.addHandler(handler)
