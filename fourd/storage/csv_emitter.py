"""Per-company CSV files under the workspace data folder."""

from __future__ import annotations

import csv
from collections import OrderedDict
from pathlib import Path
from typing import Dict, Iterable, List, Sequence

from fourd.errors import FilesystemError
from fourd.scraper.models import CSV_HEADER, Company, DrawRecord
from fourd.utils.logger import get_logger

logger = get_logger(__name__)


def partition_records(
    records: Iterable[DrawRecord],
    companies: Sequence[Company] = tuple(Company),
) -> "OrderedDict[str, List[DrawRecord]]":
    """Group records by company key, keeping input order.

    Records whose company matches none of ``companies`` are left out.
    """
    partitions: "OrderedDict[str, List[DrawRecord]]" = OrderedDict((c.key, []) for c in companies)
    dropped = 0
    for record in records:
        bucket = partitions.get(record.company_key)
        if bucket is None:
            dropped += 1
            continue
        bucket.append(record)
    if dropped:
        logger.debug(f"Dropped {dropped} rows with an unknown company")
    return partitions


def write_partition(path: Path, records: Iterable[DrawRecord]) -> int:
    count = 0
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8', newline='') as f:
            writer = csv.writer(f, lineterminator='\n')
            writer.writerow(CSV_HEADER)
            for record in records:
                writer.writerow(record.to_csv_row())
                count += 1
    except OSError as e:
        raise FilesystemError(f"Cannot write CSV: {e.strerror or e}", str(path)) from e
    return count


def write_partitions(
    data_dir: Path,
    records: Iterable[DrawRecord],
    companies: Sequence[Company] = tuple(Company),
) -> Dict[str, int]:
    """Write ``<company>.csv`` for every company; returns rows written per company."""
    counts: Dict[str, int] = {}
    for key, partition in partition_records(records, companies).items():
        path = Path(data_dir) / f"{key}.csv"
        counts[key] = write_partition(path, partition)
        logger.info(f"✔ {path.name} done ({counts[key]} rows)")
    return counts


def read_partition(path: Path) -> List[DrawRecord]:
    """Parse a company CSV file back into records."""
    try:
        with open(path, 'r', encoding='utf-8', newline='') as f:
            reader = csv.reader(f)
            header = next(reader, None)
            if header is None:
                return []
            return [DrawRecord.from_csv_row(row) for row in reader if row]
    except OSError as e:
        raise FilesystemError(f"Cannot read CSV: {e.strerror or e}", str(path)) from e
