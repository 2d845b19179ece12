"""Zip packaging of the finished workspace."""

import asyncio
import os
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import List

from fourd.errors import ArchiveError
from fourd.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class ArchiveResult:
    path: Path
    size_bytes: int
    entries: List[str]


def _walk(source_dir: Path):
    """Yield (path, arcname) for every directory and file, sorted, root excluded."""
    for current, dirs, files in os.walk(source_dir):
        dirs.sort()
        current_path = Path(current)
        if current_path != source_dir:
            yield current_path, current_path.relative_to(source_dir).as_posix() + '/'
        for name in sorted(files):
            file_path = current_path / name
            yield file_path, file_path.relative_to(source_dir).as_posix()


def build_archive(source_dir: Path, archive_path: Path, compression_level: int = 9) -> ArchiveResult:
    """
    Write a deflate-compressed zip of ``source_dir``.

    Entry names are relative to ``source_dir``; the directory's own name is
    not part of them.

    Raises:
        ArchiveError: If the directory is missing or the zip cannot be written
    """
    source_dir = Path(source_dir)
    archive_path = Path(archive_path)
    if not source_dir.is_dir():
        raise ArchiveError("Workspace directory does not exist", str(source_dir))

    entries: List[str] = []
    try:
        archive_path.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(
            archive_path, 'w',
            compression=zipfile.ZIP_DEFLATED,
            compresslevel=compression_level
        ) as zf:
            for path, arcname in _walk(source_dir):
                if path.resolve() == archive_path.resolve():
                    continue
                zf.write(path, arcname)
                entries.append(arcname)
        size = archive_path.stat().st_size
    except (OSError, zipfile.BadZipFile, zipfile.LargeZipFile) as e:
        raise ArchiveError(f"Cannot write archive: {e}", str(archive_path)) from e

    return ArchiveResult(path=archive_path, size_bytes=size, entries=entries)


async def archive_workspace(source_dir: Path, archive_path: Path, compression_level: int = 9) -> ArchiveResult:
    """Build the archive in a worker thread; resolves once the file is closed."""
    loop = asyncio.get_running_loop()
    result = await loop.run_in_executor(None, build_archive, source_dir, archive_path, compression_level)
    logger.info(f"✅ {result.path.name} ready ({result.size_bytes} bytes)")
    return result
