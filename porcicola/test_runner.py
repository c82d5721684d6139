"""Test runner used by ``manage.py test``."""

from django.conf import settings
from django.test.runner import DiscoverRunner


class NonInteractiveDiscoverRunner(DiscoverRunner):
    """Recreate stale test databases silently and keep Telegram offline."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.interactive = False

    def setup_test_environment(self, **kwargs):
        super().setup_test_environment(**kwargs)
        # Alerts must never reach a real chat from a test run.
        settings.TELEGRAM_BOT_TOKEN = ""
        settings.TELEGRAM_ALERT_CHAT_ID = ""
