import json

import pytest
from fastapi.testclient import TestClient
from app.main import app
from app.services.results import init_store, close_store


RESULTS = {
    "1": {
        "A": {"Green": 365, "Liberal": 467, "PC": 684},
        "1": {"Green": 84, "Liberal": 53, "PC": 114},
        "2": {"Green": 50, "Liberal": 50, "PC": 10},
        "3": {"Green": 0, "Liberal": 0, "PC": 0},
    },
    "9": {
        "A": {"Green": 0, "Liberal": 0, "PC": 0},
    },
}


@pytest.fixture(scope="module")
def client(tmp_path_factory):
    """Create test client for FastAPI app with a results dump loaded."""
    results_path = tmp_path_factory.mktemp("data") / "pei-election-results.json"
    results_path.write_text(json.dumps(RESULTS))

    # Load the store before the app lifespan runs
    init_store(str(results_path))

    with TestClient(app) as client:
        yield client

    # Cleanup after tests
    close_store()
