import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, stream=sys.stdout)
    # httpx logs every OpenAI request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
