"""
Calculator limits, display thresholds and logging setup
"""

import logging
from pathlib import Path
from typing import Optional, Union

# Parser limits
MAX_ARGUMENTS = 10
MAX_TOKEN_LENGTH = 63
MAX_EXPRESSION_LENGTH = 511

# Session defaults
DEFAULT_PRECISION = 10
DEFAULT_DEGREES = True
HISTORY_LIMIT = 50

# Numeric guards
NEAR_ZERO = 1e-15
MAX_FACTORIAL = 170

# Display thresholds
PLAIN_INTEGER_LIMIT = 1e15
SCIENTIFIC_UPPER = 1e10
SCIENTIFIC_LOWER = 1e-4

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: Union[int, str] = logging.WARNING,
                  log_file: Optional[Union[str, Path]] = None) -> None:
    """Configure root logging for command line use"""
    handlers = [logging.StreamHandler()]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))

    if isinstance(level, str):
        level = level.upper()

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)
