import logging
from typing import List


class Logger:
    '''
    Append-only record of log lines, kept so tests and callers can inspect
    what a participant logged. Each line is mirrored to the Python logger.
    '''

    def __init__(self, name: str = "featurechat"):
        self.entries: List[str] = []
        self._logger = logging.getLogger(f"{__name__}.{name}")

    def log(self, message: str) -> None:
        self.entries.append(message)
        self._logger.debug(message)

    @property
    def last_logged_message(self) -> str:
        ''' The most recent entry, or "" if nothing was logged yet '''
        return self.entries[-1] if self.entries else ""

    def __len__(self):
        return len(self.entries)
