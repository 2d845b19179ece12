import asyncio
import zipfile

import pytest

from fourd.errors import FetchError
from fourd.scraper.main import SiteBuilder

from conftest import StubFetcher


def test_end_to_end_build(config, tmp_path, sample_rows):
    rows = sample_rows + [
        {"Company": "toto", "Date": "2024-01-02", "First": "0001"},
        {"Company": "Lotto 4D", "Date": "2024-01-02", "First": "0002"},
    ]

    result = asyncio.run(SiteBuilder(config, fetcher=StubFetcher(rows)).run())

    workspace = tmp_path / "malaysia-4d-interactive"
    assert result.workspace == workspace
    assert result.rows_fetched == 3
    assert result.rows_per_company == {"magnum": 1, "toto": 1, "damacai": 0}
    assert result.rows_written == 2
    for sub in ("icons", "data", "screenshots"):
        assert (workspace / sub).is_dir()

    archive = tmp_path / "malaysia-4d-interactive.zip"
    assert result.archive.path == archive
    with zipfile.ZipFile(archive) as zf:
        names = zf.namelist()
    assert "index.html" in names
    assert "manifest.json" in names
    assert "service-worker.js" in names
    assert "data/magnum.csv" in names
    assert "icons/chart-96.png" in names
    assert "screenshots/" in names


def test_second_run_gives_identical_csvs(config, tmp_path, sample_rows):
    data_dir = tmp_path / "malaysia-4d-interactive" / "data"

    asyncio.run(SiteBuilder(config, fetcher=StubFetcher(sample_rows)).run())
    first = {p.name: p.read_bytes() for p in data_dir.iterdir()}
    asyncio.run(SiteBuilder(config, fetcher=StubFetcher(sample_rows)).run())
    second = {p.name: p.read_bytes() for p in data_dir.iterdir()}

    assert first == second


def test_fetch_failure_aborts_before_csvs(config, tmp_path):
    fetcher = StubFetcher(error=FetchError("Request to results source failed"))

    with pytest.raises(FetchError):
        asyncio.run(SiteBuilder(config, fetcher=fetcher).run())

    workspace = tmp_path / "malaysia-4d-interactive"
    # static assets are already written, nothing after the fetch is
    assert (workspace / "index.html").exists()
    assert list((workspace / "data").iterdir()) == []
    assert not (tmp_path / "malaysia-4d-interactive.zip").exists()


def test_archive_can_be_disabled(config, tmp_path, sample_rows):
    config.override("output", "archive", False)

    result = asyncio.run(SiteBuilder(config, fetcher=StubFetcher(sample_rows)).run())

    assert result.archive is None
    assert not (tmp_path / "malaysia-4d-interactive.zip").exists()
