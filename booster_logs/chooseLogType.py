from booster_logs.stdout import StdoutLogger
from booster_logs.file import FileLogger
from booster_logs.json import JSONLogger
from booster_logs.composite import CompositeLogger


def get_logger(mode="dev", log_type="server", level="INFO"):
    if mode == "prod":
        return CompositeLogger(
            FileLogger(log_type=log_type, level=level),
            JSONLogger(log_type=log_type, level=level)
        )
    if mode == "test":
        # tests only care about warnings and errors on the console
        return StdoutLogger(log_type=log_type, level="WARN")
    return StdoutLogger(log_type=log_type, level=level)
