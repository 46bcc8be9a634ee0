"""
Test Configuration and Fixtures

- Unit tests (test/**/unit/): in-memory repositories and AsyncMock doubles
- Integration tests (test/**/integration/): SQLAlchemy against in-memory SQLite (aiosqlite)
"""

# =============================================================================
# Environment setup MUST happen before any application import: settings and the
# log sinks are configured at import time
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)
    os.environ.setdefault('DEBUG', 'False')
    os.environ.setdefault('DEPLOY_ENV', 'test')
    os.environ.setdefault('RESERVATION_HOLD_MINUTES', '30')


_early_setup_test_environment()
