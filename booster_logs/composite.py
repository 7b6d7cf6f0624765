from booster_logs.base import Logger


class CompositeLogger(Logger):
    """Fans each event out to several loggers; each applies its own level."""

    def __init__(self, *loggers: Logger):
        first = loggers[0] if loggers else None
        super().__init__(
            log_type=first.log_type if first else "booster",
            level=first.level if first else "INFO"
        )
        self.loggers = loggers

    def enabled(self, level: str) -> bool:
        return any(l.enabled(level) for l in self.loggers)

    def info(self, msg, **data):
        for l in self.loggers:
            l.info(msg, **data)

    def debug(self, msg, **data):
        for l in self.loggers:
            l.debug(msg, **data)

    def warning(self, msg, **data):
        for l in self.loggers:
            l.warning(msg, **data)

    def error(self, msg, **data):
        for l in self.loggers:
            l.error(msg, **data)
