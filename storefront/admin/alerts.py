# storefront/admin/alerts.py

from dataclasses import dataclass
from typing import List, Optional

from storefront.models.enums import AlertMessageType
from storefront.logging.logger import setup_logger

log = setup_logger(__name__)


@dataclass(frozen=True)
class Alert:
    message: str
    type: AlertMessageType = AlertMessageType.NEUTRAL

    def to_dict(self) -> dict:
        return {"type": self.type.value, "message": self.message}


class AlertChannel:
    """Dismissible alert banner state, shared by the admin editors."""

    def __init__(self) -> None:
        self._current: Optional[Alert] = None
        self.history: List[Alert] = []

    @property
    def current(self) -> Optional[Alert]:
        return self._current

    @property
    def is_showing(self) -> bool:
        return self._current is not None

    def show(self, message: str, type: AlertMessageType = AlertMessageType.NEUTRAL) -> Alert:
        alert = Alert(message=message, type=type)
        self._current = alert
        self.history.append(alert)

        if type == AlertMessageType.ERROR:
            log.warning("Alert (%s): %s", type.value, message)
        else:
            log.info("Alert (%s): %s", type.value, message)
        return alert

    def hide(self) -> None:
        self._current = None
