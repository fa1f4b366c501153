"""Asynchronous report export.

Export is the only I/O step and runs separately from evaluation. The write
happens in a worker thread so the awaiting task can be cancelled.
"""

from pathlib import Path
from typing import Union
import asyncio
import logging

from .formatter import Report


logger = logging.getLogger("dose_taper.report.export")


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="ascii")


async def export_report(report: Report, destination: Union[str, Path]) -> Path:
    """
    Write the plain-text rendering of ``report``.

    Args:
        report: Assembled report content
        destination: Target file, or a directory to place ``report.filename`` in

    Returns:
        Path of the written file
    """
    path = Path(destination)
    if path.is_dir():
        path = path / report.filename

    text = report.to_text()
    logger.info("Exporting report %s to %s", report.title, path)
    try:
        await asyncio.to_thread(_write, path, text)
    except asyncio.CancelledError:
        logger.warning("Export of %s cancelled", path)
        raise
    logger.info("Exported %s pages to %s", len(report.pages()), path)
    return path
