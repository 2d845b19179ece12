"""Site build orchestrator."""

import asyncio
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from fourd.config.settings import Config
from fourd.scraper.fetcher import SheetFetcher
from fourd.scraper.models import DrawRecord
from fourd.storage.archiver import ArchiveResult, archive_workspace
from fourd.storage.assets import AssetWriter
from fourd.storage.csv_emitter import write_partitions
from fourd.storage.workspace import WorkspaceLayout
from fourd.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class BuildResult:
    """Outcome of one generation run."""
    workspace: Path
    rows_fetched: int = 0
    rows_per_company: Dict[str, int] = field(default_factory=dict)
    assets: List[Path] = field(default_factory=list)
    archive: Optional[ArchiveResult] = None

    @property
    def rows_written(self) -> int:
        return sum(self.rows_per_company.values())


class SiteBuilder:
    """Runs workspace, assets, fetch, CSV and archive stages in order."""

    def __init__(self, config: Config, fetcher: Optional[SheetFetcher] = None):
        self.config = config
        self.layout = WorkspaceLayout(config.workspace_dir)
        self.assets = AssetWriter(config, self.layout)
        self.fetcher = fetcher or SheetFetcher(config)
        self._rows_fetched = 0

    async def generate_csvs(self) -> Dict[str, int]:
        records: List[DrawRecord] = await self.fetcher.fetch()
        self._rows_fetched = len(records)
        return write_partitions(self.layout.data_dir, records)

    async def run(self) -> BuildResult:
        """Run the whole pipeline; any stage failure propagates."""
        logger.info(f"Building {self.layout.name}...")
        result = BuildResult(workspace=self.layout.root)

        try:
            self.layout.ensure()
            result.assets = self.assets.write_all()

            result.rows_per_company = await self.generate_csvs()
            result.rows_fetched = self._rows_fetched

            if self.config.archive_enabled:
                result.archive = await archive_workspace(
                    self.layout.root,
                    self.config.archive_path,
                    self.config.compression_level
                )
        except Exception as e:
            logger.error(f"Build failed: {e}")
            raise

        logger.info(
            f"Build completed: {result.rows_written}/{result.rows_fetched} rows written "
            f"to {self.layout.root}"
        )
        return result


def build_site(config: Config) -> BuildResult:
    """Synchronous entry point."""
    return asyncio.run(SiteBuilder(config).run())
