"""Write a source bundle to disk without ever overwriting an existing file."""

import concurrent.futures
import logging
import os
import re
from pathlib import Path
from typing import Optional

from .errors import DestinationNotEmptyError, TooManyConflictsError
from .types import (
    MaterializationPolicy,
    MaterializationReport,
    SourceBundle,
    WriteOutcome,
    WriteResult,
)

logger = logging.getLogger(__name__)

MAX_CONFLICTS = 1000
REMAPPINGS_FILE = "remappings.txt"

_EXTENSION_RE = re.compile(r"\.[^.]+$")


def conflict_path(path: Path, counter: int) -> Path:
    """Foo.sol -> Foo.conflict{counter}.sol (extension-less names get a plain suffix)."""
    if counter == 0:
        return path
    match = _EXTENSION_RE.search(path.name)
    extension = match.group(0) if match else ""
    stem = path.name[: len(path.name) - len(extension)]
    return path.with_name(f"{stem}.conflict{counter}{extension}")


def check_output_directory(destination: Path) -> None:
    """Refuse a destination that already has entries; a missing one is fine."""
    try:
        entries = os.listdir(destination)
    except FileNotFoundError:
        return
    if entries:
        raise DestinationNotEmptyError(destination)


def _write_exclusive(path: Path, content: str) -> None:
    # "x" fails with FileExistsError instead of truncating
    with open(path, "x", encoding="utf-8", newline="") as f:
        f.write(content)


def write_source_with_merge(relative_path: str, content: str, destination: Path) -> WriteResult:
    """
    Write one file under ``destination``.

    If the path is taken by identical content the write is skipped. Otherwise
    the content goes to the first free ``.conflictN`` variant.
    """
    full_path = destination / relative_path.lstrip("/")
    full_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        _write_exclusive(full_path, content)
    except FileExistsError:
        pass
    else:
        logger.info(f"Wrote: {full_path}")
        return WriteResult(relative_path, full_path, WriteOutcome.WRITTEN)

    if full_path.read_bytes() == content.encode("utf-8"):
        logger.info(f"Skipped: {full_path} (identical content)")
        return WriteResult(relative_path, full_path, WriteOutcome.SKIPPED_IDENTICAL)

    for counter in range(1, MAX_CONFLICTS + 1):
        target = conflict_path(full_path, counter)
        try:
            _write_exclusive(target, content)
        except FileExistsError:
            continue
        logger.warning(f"File conflict detected for {full_path}")
        logger.warning(f"    Saved new content as: {target}")
        return WriteResult(relative_path, target, WriteOutcome.CONFLICT)

    raise TooManyConflictsError(full_path, MAX_CONFLICTS)


def materialize(
    bundle: SourceBundle,
    destination: Path,
    policy: MaterializationPolicy = MaterializationPolicy.STRICT,
    max_workers: Optional[int] = None,
) -> MaterializationReport:
    """
    Write every file of ``bundle`` (plus remappings.txt) under ``destination``.

    All writes run concurrently and are waited on before returning. If any of
    them failed, the first failure in bundle order is raised once the others
    have finished; nothing is rolled back.
    """
    destination = Path(destination)
    if policy is MaterializationPolicy.STRICT:
        check_output_directory(destination)

    entries = list(bundle.files.items())
    if bundle.remappings:
        # null entries join as empty lines
        entries.append((REMAPPINGS_FILE, "\n".join(r or "" for r in bundle.remappings)))

    with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [
            executor.submit(write_source_with_merge, relative_path, content, destination)
            for relative_path, content in entries
        ]
        concurrent.futures.wait(futures)

    report = MaterializationReport(destination=destination, policy=policy)
    for future in futures:
        # re-raises the write's exception, if any
        report.results.append(future.result())
    return report
