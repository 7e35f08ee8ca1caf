import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str) -> None:
    """Apply the configured log level to the root logger once per process."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger("vloghub").setLevel(level.upper())
