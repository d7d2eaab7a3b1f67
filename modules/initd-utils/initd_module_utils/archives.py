"""unzip_multi — extract several ZIP archives into one merged directory.

Archives are extracted concurrently in worker threads (bounded by the CPU
count), all into the same output directory, so archives that share a
top-level folder are merged. Later archives overwrite earlier files.
"""

from __future__ import annotations

import asyncio
import logging
import os
import time
import zipfile
from collections.abc import Mapping
from pathlib import Path

from .files import count_files, matching_files

logger = logging.getLogger(__name__)


def _extract(archive: Path, output_dir: Path) -> None:
    logger.info("Extracting %s into %s ...", archive, output_dir)
    with zipfile.ZipFile(archive) as zf:
        zf.extractall(output_dir)


async def unzip_multi(
    prefix: str = "",
    output_dir: str | os.PathLike[str] | None = None,
    directory: str | os.PathLike[str] | None = None,
    environ: Mapping[str, str] | None = None,
    jobs: int | None = None,
) -> list[Path]:
    """Extract every ``<prefix>*.zip`` in directory into output_dir.

    Args:
        prefix: Only archives whose name starts with this are extracted.
        output_dir: Destination; defaults to ``<directory>/unzipped_<unix time>``.
        directory: Where to look for archives; defaults to the working directory.
        environ: UNZIP_OUTPUT_DIR / UNZIP_FILE_PREFIX override the arguments.
        jobs: Maximum concurrent extractions; defaults to the CPU count.

    Returns:
        The archives that were extracted, sorted by name.

    Raises:
        FileNotFoundError: directory contains no ZIP files at all.
    """
    env = os.environ if environ is None else environ
    base = Path(directory) if directory is not None else Path.cwd()
    if count_files("*.zip", base) < 1:
        raise FileNotFoundError("[ ERROR ]: No ZIP files found in working directory.")

    out = Path(output_dir) if output_dir is not None else base / f"unzipped_{int(time.time())}"
    if env.get("UNZIP_OUTPUT_DIR"):
        out = Path(env["UNZIP_OUTPUT_DIR"])
    if env.get("UNZIP_FILE_PREFIX"):
        prefix = env["UNZIP_FILE_PREFIX"]
    out.mkdir(parents=True, exist_ok=True)

    archives = matching_files(base, f"{prefix}*.zip")
    semaphore = asyncio.Semaphore(jobs or os.cpu_count() or 4)

    async def _run(archive: Path) -> None:
        async with semaphore:
            await asyncio.to_thread(_extract, archive, out)

    await asyncio.gather(*(_run(a) for a in archives))
    logger.info("unzip_multi: extracted %d archive(s) into %s", len(archives), out)
    return archives
