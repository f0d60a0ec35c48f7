# backend/mission_control/pages/base.py
import logging

log = logging.getLogger(__name__)


class Page:
    """State holder for one page. After close() every state update is dropped."""

    def __init__(self):
        self.closed = False
        self.loading = True
        self.error = None

    def close(self) -> None:
        self.closed = True

    def _set(self, **values) -> None:
        if self.closed:
            log.debug("dropping late update on closed %s: %s", type(self).__name__, sorted(values))
            return
        for key, value in values.items():
            setattr(self, key, value)

    def _fail(self, message: str) -> bool:
        self._set(error=message)
        return False
