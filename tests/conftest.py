# tests/conftest.py
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from prosecheck.main import app
from prosecheck.models.analysis import Feedback

# --------------------------------------------------------------------
# FastAPI test client available as fixture `client`
# --------------------------------------------------------------------
@pytest.fixture(scope="session")
def client() -> TestClient:
    return TestClient(app)

# --------------------------------------------------------------------
# Sample texts
# --------------------------------------------------------------------
@pytest.fixture
def sample_text() -> str:
    return (
        "This is a smaple sentence about the goverment budget. We recieve many letters every week.\n\n"
        "Another paragraph follows here, and it is already fine."
    )

# --------------------------------------------------------------------
# Stub the LLM collaborator: no network, no API key needed
# --------------------------------------------------------------------
def fake_feedback(text: str) -> Feedback:
    corrected = (text.replace("smaple", "sample")
                     .replace("goverment", "government")
                     .replace("recieve", "receive"))
    return Feedback(
        corrected_text=corrected,
        error_analysis="A few spelling mistakes.",
        assessment="The essay is clear and coherent.",
        full_narrative="## CORRECTED TEXT\n" + corrected + "\n\n## IELTS BAND SCORE ANALYSIS\nOverall Band Estimate: 6.5",
        band_estimate=6.5,
    )


@pytest.fixture(autouse=True)
def stub_llm(monkeypatch):
    from prosecheck.services import llm as llm_mod
    monkeypatch.setattr(llm_mod, "fetch_feedback", fake_feedback)


class ZeroRng:
    """Stands in for random.Random where a test needs exact scores."""
    def uniform(self, a, b):
        return 0.0


@pytest.fixture
def zero_rng() -> ZeroRng:
    return ZeroRng()
