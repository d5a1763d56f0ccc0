"""Console logging setup for the command line and the API server."""

import sys

from loguru import logger

LOG_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}"


def configure_logging(level: str = "INFO", sink=None) -> int:
	"""Replace loguru's default handler with one at the requested level (stderr unless a sink is given). Returns the handler id."""
	logger.remove()
	return logger.add(sink if sink is not None else sys.stderr, level=level.upper(), format=LOG_FORMAT)
