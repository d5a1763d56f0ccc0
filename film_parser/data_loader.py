"""
Data loading module.
Reads record files (one film record per line) from disk.
"""

# Standard libs for typing and paths
from typing import List, Union  # type hints
from pathlib import Path  # filesystem-safe paths

# Console logging
from loguru import logger  # console logger

from .errors import RecordFileNotFoundError, RecordFileReadError


class RecordLoader:
	"""
	Handles loading raw film records from text files.
	"""

	def __init__(self, encoding: str = 'utf-8'):
		"""Initialize the loader with the encoding used for every file it opens."""
		self.encoding = encoding  # text encoding of record files

	def read_lines(self, filepath: Union[str, Path]) -> List[str]:
		"""
		Read every line of a file, without line terminators.
		Raises RecordFileNotFoundError when the file is missing and RecordFileReadError
		when it cannot be opened or decoded.
		"""
		filepath = Path(filepath)  # normalize path

		# Validate the file presence early to give clear error messages
		if not filepath.exists():
			raise RecordFileNotFoundError(f"Specified file was not found: {filepath}")

		logger.info(f"[Loader] Reading records from {filepath}...")  # log action

		try:
			with open(filepath, 'r', encoding=self.encoding) as f:
				lines = [line.rstrip('\r\n') for line in f]  # strip terminators only
		except UnicodeDecodeError as e:
			raise RecordFileReadError(f"Failed to read the file: {filepath}: {e}") from e  # bad bytes
		except OSError as e:
			raise RecordFileReadError(f"Failed to open the file {filepath}: {e}") from e  # directory, permissions

		logger.info(f"[Loader] Read {len(lines)} lines.")  # summary
		return lines  # return list

	def read_records(self, filepath: Union[str, Path]) -> List[str]:
		"""Read a file and keep only the non-blank lines; each one is a record."""
		records = [line for line in self.read_lines(filepath) if line.strip()]  # blank lines separate records
		logger.debug(f"[Loader] {len(records)} non-blank records in {filepath}")  # count
		return records
