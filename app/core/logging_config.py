from loguru import logger
import os
import sys
from dotenv import load_dotenv

load_dotenv()

LOG_DIR = os.getenv("LOG_DIR", "logs")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
# Mirror logs to stderr (uvicorn console) when set
LOG_CONSOLE = os.getenv("LOG_CONSOLE", "").lower() in ("1", "true", "yes")

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<7} | {extra[log_type]:<8} | {message}"

# Create folder if missing
if not os.path.exists(LOG_DIR):
    os.makedirs(LOG_DIR)

# Remove default handler
logger.remove()

# Untagged records are general app logs
logger.configure(extra={"log_type": "app"})


def only(log_type):
    return lambda record: record["extra"].get("log_type") == log_type


# General application log
logger.add(
    f"{LOG_DIR}/app.log",
    rotation="1 week",
    retention="4 weeks",
    level=LOG_LEVEL,
    enqueue=True,
    format=LOG_FORMAT,
)

# Booking logs (create / cancel / refused)
logger.add(
    f"{LOG_DIR}/bookings.log",
    rotation="1 week",
    retention="4 weeks",
    level="INFO",
    enqueue=True,
    filter=only("booking"),
    format=LOG_FORMAT,
)

# Change notifications and snapshot refreshes, per worker
logger.add(
    f"{LOG_DIR}/changes.log",
    rotation="1 day",
    retention="1 week",
    level="DEBUG",
    enqueue=True,
    filter=only("changes"),
    format="{time:YYYY-MM-DD HH:mm:ss.SSS} | pid={process} | {level:<7} | {message}",
)

# Admin console activity
logger.add(
    f"{LOG_DIR}/admin.log",
    rotation="1 week",
    retention="4 weeks",
    level="INFO",
    enqueue=True,
    filter=only("admin"),
    format=LOG_FORMAT,
)

# Error logs
logger.add(
    f"{LOG_DIR}/errors.log",
    rotation="1 week",
    retention="8 weeks",
    level="ERROR",
    enqueue=True,
    format=LOG_FORMAT,
    backtrace=True,
)

if LOG_CONSOLE:
    logger.add(sys.stderr, level=LOG_LEVEL, format=LOG_FORMAT)


def get_logger():
    return logger
