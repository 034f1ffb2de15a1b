"""Configuration for the PEI district results extractor."""

import os

from dotenv import load_dotenv

load_dotenv()

RESULTS_BASE_URL = os.getenv(
    "PEI_RESULTS_BASE_URL",
    "http://results.electionspei.ca/provincial/results_2019",
)
RESULTS_URL_TEMPLATE = RESULTS_BASE_URL.rstrip("/") + "/district{district}.html"
LOCAL_HTML_TEMPLATE = "district{district}.html"

DATA_DIR = os.getenv("PEI_DATA_DIR", "data")
FETCH_TIMEOUT = float(os.getenv("PEI_FETCH_TIMEOUT", "30"))
USER_AGENT = "Mozilla/5.0 (compatible; PEIResultsBot/1.0)"

# 27 electoral districts, 2019 provincial general election
DISTRICT_IDS = list(range(1, 28))

# District 9's election was delayed; its page carries no results
DELAYED_DISTRICTS = frozenset({9})

ADVANCE_POLL = "A"

# Party tracked by the first-or-second report
THRESHOLD_PARTY = "Green"

# Page structure
HEADER_ROW_SELECTOR = "tr.summaryheader"
RESULT_ROW_SELECTOR = "tr.districtresults"
LABEL_CELL_CLASS = "districtheadertext"

# Output layout
RESULTS_JSON = "pei-election-results.json"
WINNERS_CSV = "pei-election-poll-winners.csv"
RUNNER_UPS_CSV = "pei-election-poll-secondplace.csv"
GREEN_CSV = "pei-election-poll-green-first-or-second.csv"
CSV_HEADER = ["distpoll", "winner"]
