"""
FastAPI server exposing the film record parser.
Endpoints:
- GET /health: basic health check
- POST /parse: parse a batch of records, returns accepted films and diagnostics
- POST /parse/record: parse a single record, returns one film or a 422 with the error kind

Settings (mode, workers, log level) are read from FILM_PARSER_* environment variables at startup.

Run: uvicorn api:app --reload
"""

# Import standard libraries for timing and startup hooks
import time  # measure startup and request latencies
from contextlib import asynccontextmanager  # lifespan hook
from typing import List, Literal, Optional  # precise typing for clarity

# Import FastAPI for building the web API and Pydantic for request/response models
from fastapi import FastAPI, HTTPException  # FastAPI primitives
from pydantic import BaseModel, Field  # request/response schema definitions

# Import our internal modules for parsing
from film_parser import __version__
from film_parser.config import PipelineConfig  # env-driven settings
from film_parser.errors import BatchAbortedError, RecordError  # failure taxonomy
from film_parser.models import Diagnostic, Film  # core data classes
from film_parser.pipeline import BatchPipeline, describe_error, parse_film  # parsing entry points

# Import loguru for simple, structured console logging
from loguru import logger  # convenient console logger

# Globals that hold the active settings and measured startup time
CONFIG: PipelineConfig = PipelineConfig()  # replaced from the environment at startup
STARTUP_TIME_S: float = 0.0  # measures how long startup took


@asynccontextmanager
async def lifespan(app: FastAPI):
	"""Load settings once and log how the server was configured."""
	global CONFIG, STARTUP_TIME_S  # refer to module-level globals
	start = time.time()  # start timer for startup latency
	CONFIG = PipelineConfig.from_env()  # FILM_PARSER_* overrides
	STARTUP_TIME_S = time.time() - start  # elapsed seconds
	logger.info(f"[API] Startup complete | mode={CONFIG.mode} | workers={CONFIG.workers}")  # summary log
	yield


# Instantiate the FastAPI application with metadata
app = FastAPI(title="Film Parser API", version=__version__, lifespan=lifespan)  # web app


# Pydantic model that describes a single film in responses
class FilmOut(BaseModel):
	title: str
	year: int
	director: str
	writer: str
	genre: List[str]
	stars: List[str]
	description: str

	@classmethod
	def from_film(cls, film: Film) -> "FilmOut":
		return cls(**film.to_dict())


# Pydantic model for one rejected record
class DiagnosticOut(BaseModel):
	index: int  # position of the record in the request
	record: str  # original text
	reason: str  # failure message
	kind: str  # EmptyInput | SyntaxError | InvalidYear | MissingFields

	@classmethod
	def from_diagnostic(cls, d: Diagnostic) -> "DiagnosticOut":
		return cls(index=d.index, record=d.record, reason=d.reason, kind=d.kind)


# Request body for batch parsing
class ParseRequest(BaseModel):
	records: List[str] = Field(..., description="Raw film records, one per entry")
	mode: Optional[Literal["strict", "lenient"]] = None  # defaults to the server setting


# Request body for single-record parsing
class RecordRequest(BaseModel):
	record: str


# Pydantic model for the complete batch response payload
class ParseResponse(BaseModel):
	accepted: int  # number of films produced
	rejected: int  # number of diagnostics
	elapsed_ms: float  # server-side parse time in ms
	films: List[FilmOut]
	diagnostics: List[DiagnosticOut]


# Simple health endpoint for readiness checks
@app.get("/health")
async def health():
	"""Return minimal health info for liveness/readiness probes."""
	return {
		"status": "ok",  # constant indicator
		"mode": CONFIG.mode,  # default failure policy
		"startup_seconds": round(STARTUP_TIME_S, 2)  # startup latency
	}


@app.post("/parse", response_model=ParseResponse)
def parse(request: ParseRequest):
	"""Parse a batch of records. Strict mode answers 422 with the first failing record."""
	config = CONFIG.model_copy(update={"mode": request.mode}) if request.mode else CONFIG
	start = time.time()  # start timer
	logger.debug(f"[API] /parse records={len(request.records)} mode={config.mode}")  # debug log of input

	try:
		result = BatchPipeline(config).run(request.records)
	except BatchAbortedError as e:
		logger.info(f"[API] /parse aborted at record {e.diagnostic.index}")
		raise HTTPException(status_code=422, detail=DiagnosticOut.from_diagnostic(e.diagnostic).model_dump())

	elapsed_ms = (time.time() - start) * 1000  # compute ms
	logger.info(f"[API] /parse accepted {len(result.films)} of {len(request.records)} records in {elapsed_ms:.2f} ms")  # summary
	return ParseResponse(
		accepted=len(result.films),
		rejected=len(result.diagnostics),
		elapsed_ms=round(elapsed_ms, 2),
		films=[FilmOut.from_film(f) for f in result.films],
		diagnostics=[DiagnosticOut.from_diagnostic(d) for d in result.diagnostics],
	)


@app.post("/parse/record", response_model=FilmOut)
def parse_record(request: RecordRequest):
	"""Parse exactly one record."""
	try:
		film = parse_film(request.record)
	except RecordError as e:
		raise HTTPException(status_code=422, detail={"kind": e.kind, "reason": describe_error(e)})
	return FilmOut.from_film(film)
