import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(log_level_str: str = "INFO") -> None:
    """Configure root logging once for the app process."""
    log_level = getattr(logging, log_level_str.upper(), logging.INFO)
    logging.basicConfig(level=log_level, format=LOG_FORMAT)
    logging.getLogger().setLevel(log_level)
    # requests/urllib3 are chatty at DEBUG
    logging.getLogger("urllib3").setLevel(max(log_level, logging.INFO))
