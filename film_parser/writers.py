"""
Result writers.
Render accepted films as text and write them to a destination the caller chooses.
The parser core never touches the filesystem; these functions are the only output path.
"""

from pathlib import Path
from typing import Callable, Iterable, TextIO, Tuple, Union

from loguru import logger

from .config import PipelineConfig
from .errors import ResultWriteError
from .models import Film

FilmRenderer = Callable[[Film], str]
Destination = Union[str, Path, TextIO]


def render_film(film: Film) -> str:
	"""Seven label/value lines followed by a blank line."""
	return (
		f"Title: {film.title}\n"
		f"Year: {film.year}\n"
		f"Director: {film.director}\n"
		f"Writer: {film.writer}\n"
		f"Genre: {', '.join(film.genre)}\n"
		f"Stars: {', '.join(film.stars)}\n"
		f"Description: {film.description}\n"
		"\n"
	)


def render_film_structure(film: Film) -> str:
	"""The dataclass repr on a single line, for debugging."""
	return f"{film!r}\n"


def render_films(films: Iterable[Film], renderer: FilmRenderer = render_film) -> str:
	return "".join(renderer(film) for film in films)


def write_films(films: Iterable[Film], destination: Destination, renderer: FilmRenderer = render_film) -> int:
	"""
	Write rendered films to an open text stream or to a file path (parent directories are created).
	Returns the number of films written.
	"""
	films = list(films)
	text = render_films(films, renderer)

	if hasattr(destination, "write"):
		destination.write(text)
		return len(films)

	path = Path(destination)
	try:
		path.parent.mkdir(parents=True, exist_ok=True)
		path.write_text(text, encoding="utf-8")
	except OSError as e:
		raise ResultWriteError(f"Failed to write to the file {path}: {e}") from e
	logger.info(f"[Writer] Wrote {len(films)} films to {path}")
	return len(films)


def write_results(films: Iterable[Film], config: PipelineConfig) -> Tuple[Path, Path]:
	"""Write both result files named in the config: formatted text and raw structure."""
	films = list(films)
	write_films(films, config.result_path, render_film)
	write_films(films, config.structure_path, render_film_structure)
	return config.result_path, config.structure_path
