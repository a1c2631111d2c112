"""
Telegram notifier adapter - Sends plain-text messages through the Bot API.
"""

import logging

import requests

from endpoint_watcher.core.errors import NotificationError
from endpoint_watcher.core.ports import Notifier

logger = logging.getLogger(__name__)

TELEGRAM_API = "https://api.telegram.org"


class AdapterTelegramNotifier(Notifier):  # pylint: disable=too-few-public-methods
    """
    Adapter that implements Notifier with Telegram's sendMessage method.

    One attempt per message; the caller decides what a failure means.
    """

    def __init__(
        self,
        token: str,
        chat_id: str,
        timeout: float = 10.0,
        api_url: str = TELEGRAM_API,
    ):
        """
        Initialize the notifier.

        Args:
            token: Bot token
            chat_id: Destination chat or channel identifier
            timeout: Request timeout in seconds
            api_url: Bot API base URL
        """
        self.token = token
        self.chat_id = chat_id
        self.timeout = timeout
        self.api_url = api_url.rstrip("/")

    def send(self, text: str) -> None:
        """
        Send a message.

        Args:
            text: Plain message text

        Raises:
            NotificationError: On network failure or non-2xx response
        """
        url = f"{self.api_url}/bot{self.token}/sendMessage"
        try:
            response = requests.post(
                url,
                data={"chat_id": self.chat_id, "text": text},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            # The URL embeds the token; keep it out of the message.
            raise NotificationError(
                f"telegram request: {type(e).__name__}"
            ) from e

        if not 200 <= response.status_code < 300:
            raise NotificationError(
                f"telegram HTTP {response.status_code}: {response.text}"
            )

        logger.info("Sent Telegram notification to chat %s", self.chat_id)
