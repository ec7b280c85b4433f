from __future__ import annotations
from typing import Optional

from recrut_core.errors import message_for
from recrut_core.ports.notifier import Notifier
from recrut_core.utils.logging import get_logger


logger = get_logger(__name__)


class PageState:
    """État transitoire d'une page: drapeau de chargement + notifications.

    Toute erreur d'appel API est journalisée puis affichée via le notifier;
    elle ne remonte jamais jusqu'au script Streamlit.
    """

    def __init__(self, notifier: Notifier, organization_id: Optional[int] = None) -> None:
        self.notifier = notifier
        self.organization_id = organization_id
        self.is_loading = True

    def _fail(self, event: str, exc: Exception, default: str) -> None:
        logger.warning(event, extra={"page": type(self).__name__, "error": str(exc)})
        self.notifier.error(message_for(exc, default))
