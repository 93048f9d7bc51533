from __future__ import annotations

"""
Logging Settings.

The CLI chooses the verbosity (-v / --debug) and an optional log file; the
record layout is fixed for the whole package.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

CONSOLE_FORMAT = "%(levelname)s | %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)s | %(threadName)s | %(name)s | %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class LoggingConfig:
    """
    Settings for one configure_logging() call.

    Attributes:
        level: Level name ("DEBUG", "INFO", ...) or number. Unknown names
               fall back to WARNING, which is also the default.
        console: Emit records on stderr.
        log_file: Optional rotating log file, parent directories are created.
        max_bytes: Rollover size of the log file.
        backup_count: Rolled files to keep.
    """
    level: Union[str, int] = "WARNING"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 512 * 1024
    backup_count: int = 2

    @property
    def level_no(self) -> int:
        if isinstance(self.level, int):
            return self.level
        resolved = logging.getLevelName(str(self.level).strip().upper())
        return resolved if isinstance(resolved, int) else logging.WARNING
