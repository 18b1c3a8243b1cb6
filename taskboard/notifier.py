# taskboard/notifier.py - user-facing notices
import sys
from typing import Dict

import requests

from .config import Config
from .utils import retry_on_failure, setup_logger

logger = setup_logger(__name__)

TELEGRAM_MAX_LENGTH = 4096


class Notifier:
    """Shows notices to the user on the console and, if configured, on Telegram."""

    def __init__(self, config: Config, dry_run: bool = False, stream=None):
        self.config = config
        self.dry_run = dry_run
        self.stream = stream or sys.stderr

    @retry_on_failure(max_retries=2)
    def send_telegram(self, message: str) -> bool:
        """Push ``message`` to the configured Telegram chat."""
        if not self.config.telegram_enabled:
            logger.warning("Telegram is not configured, skipping push")
            return False

        try:
            chat_id = int(self.config.telegram_chat_id)
        except (ValueError, TypeError):
            logger.error(f"Invalid Telegram chat id: {self.config.telegram_chat_id}")
            return False

        if len(message) > TELEGRAM_MAX_LENGTH:
            message = message[:TELEGRAM_MAX_LENGTH - 3] + "..."

        url = f"https://api.telegram.org/bot{self.config.telegram_bot_token}/sendMessage"
        response = requests.post(url, json={"chat_id": chat_id, "text": message}, timeout=10)

        if response.status_code == 200:
            logger.info(f"Telegram notification sent to {chat_id}")
            return True
        logger.error(f"Telegram API error {response.status_code}: {response.text}")
        return False

    def alert(self, message: str) -> Dict[str, bool]:
        """Show a blocking-style notice; returns delivery status per channel."""
        print(message, file=self.stream)
        logger.warning(message)
        results = {"console": True}

        if self.config.telegram_enabled and not self.dry_run:
            try:
                results["telegram"] = self.send_telegram(message)
            except requests.RequestException as e:
                logger.error(f"Telegram notification failed: {e}")
                results["telegram"] = False
        return results
