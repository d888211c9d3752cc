import pytest

from tracker import config as config_module
from tracker.config import Config


@pytest.fixture
def sample_collections() -> dict:
    """One record per collection, shaped like the tracker's local storage."""
    return {
        "applied": [
            {"id": "a1", "company": "Acme", "role": "Backend Engineer", "appliedOn": "2025-01-05"},
        ],
        "interviews": [
            {"id": "i1", "company": "Globex", "role": "SRE", "date": "2025-03-01T09:00"},
        ],
        "rejected": [
            {
                "id": "a1",
                "company": "Acme",
                "role": "Backend Engineer",
                "appliedDate": "2025-01-05",
                "decisionDate": "2025-02-03",
            },
        ],
        "withdrawn": [
            {
                "id": "w1",
                "company": "Initech",
                "role": "Data Engineer",
                "appliedOn": "2025-01-20",
                "interviewDate": "2025-02-10T14:30:00",
                "withdrawnDate": "2025-02-12",
            },
        ],
        "offers": [
            {"id": "o1", "company": "Hooli", "role": "ML Engineer", "offerDate": "2025-02-28"},
        ],
    }


@pytest.fixture
def config(monkeypatch):
    """Install an in-memory Config instead of reading config/config.yaml."""
    cfg = Config(spreadsheet_id="sheet-123", digest_recipient="me@example.com", user_name="Sam")
    monkeypatch.setattr(config_module, "_config", cfg)
    return cfg
