"""Test configuration for pytest.

This module imports fixtures that should be available to all tests.
"""

# Import fixtures
from tests.fixtures.common import (  # noqa
    clock,
    memory_store,
    fake_provider,
    notifier,
    alert_history,
    detector,
    wallet_service,
    settings,
    services,
)
