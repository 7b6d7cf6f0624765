from abc import ABC, abstractmethod

# Ordering used to drop events below a logger's threshold.
LEVELS = {"DEBUG": 10, "INFO": 20, "WARN": 30, "ERROR": 40}


class Logger(ABC):
    """Structured event logger. Each call is an event name plus keyword data."""

    def __init__(self, log_type="booster", level="INFO"):
        self.log_type = log_type
        self.level = level.upper()

    def enabled(self, level: str) -> bool:
        return LEVELS.get(level, 0) >= LEVELS.get(self.level, LEVELS["INFO"])

    @abstractmethod
    def info(self, msg: str, **data): ...

    @abstractmethod
    def debug(self, msg: str, **data): ...

    @abstractmethod
    def warning(self, msg: str, **data): ...

    @abstractmethod
    def error(self, msg: str, **data): ...
