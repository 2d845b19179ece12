import os
import sys
from pathlib import Path
from typing import List

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from fourd.config.settings import Config
from fourd.scraper.models import DrawRecord


SAMPLE_ROWS = [
    {
        "Company": "Magnum",
        "Date": "2024-01-01",
        "First": "1234",
        "Second": "5678",
        "Third": "9012",
        "Special": "1111, 2222",
        "Consolation": "3333, 4444",
    },
]


class StubFetcher:
    """Stands in for SheetFetcher, returning rows without any network access."""

    def __init__(self, rows=None, error=None):
        self.rows = rows if rows is not None else SAMPLE_ROWS
        self.error = error
        self.calls = 0

    async def fetch(self) -> List[DrawRecord]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return [DrawRecord.from_row(row) for row in self.rows]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith("FOURD__"):
            monkeypatch.delenv(key)
    yield


@pytest.fixture()
def config(tmp_path):
    cfg = Config()
    cfg.override("output", "root_dir", str(tmp_path))
    cfg.override("output", "archive_dir", str(tmp_path))
    return cfg


@pytest.fixture()
def sample_rows():
    return [dict(row) for row in SAMPLE_ROWS]
