from booster_logs.chooseLogType import get_logger
import os

env = os.getenv("ENV", "dev")
level = os.getenv("LOG_LEVEL", "INFO")

server_logger = get_logger(mode=env, log_type="server", level=level)

# belt refills, empty pools, seam dedup exhaustion
belt_logger = get_logger(mode=env, log_type="belts", level=level)

# pack / pod assembly and upgrade pass
pack_logger = get_logger(mode=env, log_type="packs", level=level)
