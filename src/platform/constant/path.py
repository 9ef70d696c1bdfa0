import os
from pathlib import Path


# Repository root (holds src/, test/, script/)
BASE_DIR = Path(__file__).resolve().parents[3]

# Log files; the test suite redirects them with TEST_LOG_DIR
LOG_DIR = Path(os.environ.get('TEST_LOG_DIR') or BASE_DIR / 'logs')
IS_TEST_LOG_DIR = bool(os.environ.get('TEST_LOG_DIR'))
