"""UI configuration constants.

Centralizes magic numbers and configuration values for the UI module.
"""

import tempfile
from enum import IntEnum
from pathlib import Path


class LogLevel(IntEnum):
    """Thresholds for the log panel; lower values show more entries."""

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    @classmethod
    def parse(cls, value: str) -> "LogLevel":
        """Look up a level by name, case-insensitively. Unknown names give DEBUG."""
        return cls.__members__.get(value.strip().upper(), cls.DEBUG)


# Input history configuration
INPUT_HISTORY_MAX_SIZE = 100  # Maximum entries in input history

# Log panel configuration
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"
LOG_MAX_MESSAGE_LENGTH = 500  # Characters before truncating log messages

# Chat display configuration
MESSAGE_TIMESTAMP_FORMAT = "%H:%M:%S"
INPUT_PLACEHOLDER = "Ask a financial question..."

# Chart files
CHART_FILE_PREFIX = "chart"
DEFAULT_CHART_DIR = Path(tempfile.gettempdir()) / "finchat-charts"
