"""
Streamlit UI for the Film Parser.
Paste film records (one per line) and see which were accepted and why the others were rejected.
Calls the local FastAPI server at http://localhost:8000 when it is reachable, otherwise
parses in-process with the same pipeline the API uses.

Run API (optional):   uvicorn api:app --reload
Run UI:                streamlit run streamlit_app.py
"""

from dataclasses import asdict  # Diagnostic -> dict like the API payload

# HTTP client to call the API when running in API mode
import requests  # make web requests to the FastAPI server
# Streamlit framework to build a simple interactive UI
import streamlit as st  # UI primitives

# Local pipeline imports for fallback/local mode (when API isn't used)
from film_parser.config import PipelineConfig  # settings for local runs
from film_parser.errors import BatchAbortedError  # strict-mode abort
from film_parser.grammar import split_records  # text area -> record strings
from film_parser.pipeline import BatchPipeline  # parse + validate + assemble

# Default URL where the FastAPI server is expected to run locally
DEFAULT_API_URL = "http://localhost:8000"  # default API base URL

SAMPLE_RECORDS = (
	"Title: I Used To Be Funny; Year: 2023; Director: Ally Pankiw; Writer: Ally Pankiw; "
	"Genre: [Comedy, Drama]; Stars: [Rachel Sennott, Olga Petsa, Jason Jones]; "
	"Description: A stand-up comedian struggling with PTSD.\n"
	"Title: Some_Title; Year: 2023;"
)

# Configure Streamlit page (title and layout width)
st.set_page_config(page_title="Film Parser", layout="wide")  # wide layout

# Main page title
st.title("🎬 Film Parser")  # friendly header

# Sidebar contains configuration controls
with st.sidebar:
	st.header("Settings")  # section label
	mode = st.radio("Failure policy", ["lenient", "strict"], index=0, help="Strict stops at the first bad record.")
	api_url = st.text_input("API URL", DEFAULT_API_URL)  # where the API lives
	# Toggle to force local mode; if API health probe fails we also fall back to local
	use_local = st.toggle("Use local parser", value=False, help="If enabled or API is unreachable, parsing runs in this process.")

# If not forcing local, check quickly whether the API is reachable
api_available = False  # default assumption
if not use_local:
	try:
		h = requests.get(f"{api_url}/health", timeout=3)  # ping API health endpoint
		api_available = h.ok  # True if server responded 200 OK
	except requests.RequestException:
		api_available = False  # probe failed
		st.sidebar.info("API not reachable; will parse locally.")  # inform user

# Main text area where users paste their records
text = st.text_area("Film records (one per line)", value=SAMPLE_RECORDS, height=200)

parse_btn = st.button("Parse", type="primary")  # triggers parsing

if parse_btn:
	records = split_records(text)  # blank lines are skipped
	with st.spinner("Parsing..."):
		try:
			if api_available and not use_local:
				# API mode: let the server run the pipeline
				resp = requests.post(f"{api_url}/parse", json={"records": records, "mode": mode}, timeout=60)
				if resp.status_code == 422:
					payload = None
					st.error(f"Aborted: {resp.json().get('detail')}")  # strict-mode abort
				else:
					resp.raise_for_status()  # raise error if server responded with an error code
					payload = resp.json()  # parse JSON returned by API
			else:
				# Local mode: run the full pipeline inside this process
				result = BatchPipeline(PipelineConfig(mode=mode)).run(records)
				payload = {
					"films": [f.to_dict() for f in result.films],
					"diagnostics": [asdict(d) for d in result.diagnostics],
				}

			if payload is not None:
				st.success(f"Accepted {len(payload['films'])} of {len(records)} records")
				if payload["films"]:
					st.dataframe(payload["films"], width="stretch")  # one row per film
				for d in payload["diagnostics"]:
					st.warning(f"Record {d['index'] + 1}, {d['kind']}: {d['reason']}\n\n{d['record']}")

		except BatchAbortedError as e:  # local strict mode
			st.error(str(e))
		except requests.RequestException as e:  # network/API errors
			st.error(f"API request failed: {e}")  # show human-friendly message

# Show a footer indicator of current mode
st.sidebar.markdown("---")  # separator
if api_available and not use_local:
	st.sidebar.caption("Mode: API client")  # mode label
else:
	st.sidebar.caption("Mode: Local parser")  # mode label
