"""Per-file preparation: detect -> extract -> truncate."""

from __future__ import annotations

import asyncio
import logging

from aria.errors import ExtractionError, RejectedFormat
from aria.extractors import extract
from aria.models import PreparedFile, RawFile
from aria.protocols import Truncator
from aria.truncators import WindowTruncator
from aria.utils import detect

logger = logging.getLogger(__name__)


def prepare_file(raw: RawFile, truncator: Truncator | None = None) -> PreparedFile:
    """Run one file through detection, extraction and truncation.

    Args:
        raw: The uploaded file
        truncator: Size-bounding strategy (defaults to WindowTruncator())

    Raises:
        RejectedFormat: if the extension is not supported
        ExtractionError: if the content cannot be parsed
    """
    kind = detect(raw.name)
    if kind is None:
        raise RejectedFormat(raw.name)

    truncator = truncator or WindowTruncator()
    extraction = extract(raw, kind)
    content = truncator.truncate(extraction.text)

    if content.was_truncated:
        logger.debug(
            f"Truncated {raw.name}: {len(extraction.text):,} -> {len(content.text):,} chars"
        )
    return PreparedFile(raw=raw, extraction=extraction, content=content)


async def _prepare_in_thread(raw: RawFile, truncator: Truncator | None) -> PreparedFile:
    try:
        return await asyncio.to_thread(prepare_file, raw, truncator)
    except (ExtractionError, RejectedFormat):
        raise
    except Exception as e:
        raise ExtractionError(raw.name, str(e) or type(e).__name__) from e


async def prepare_batch(
    files: list[RawFile], truncator: Truncator | None = None
) -> list[PreparedFile]:
    """Prepare every file concurrently and return results in input order.

    The batch is all-or-nothing: the first failure propagates once every
    file has finished.
    """
    results = await asyncio.gather(
        *(_prepare_in_thread(raw, truncator) for raw in files),
        return_exceptions=True,
    )
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return list(results)
