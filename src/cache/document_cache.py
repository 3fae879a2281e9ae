# src/cache/document_cache.py — v1
"""In-memory cache of the combined, normalized text of a document folder.

The cache lazily reloads inside the request path once its time-to-live
has elapsed. A reload re-extracts every supported document, but the
cached text is only replaced when the fingerprint of the normalized
result actually changed, so the completion provider keeps seeing a
byte-identical context (and can keep serving it from its prompt cache).

Nothing here raises to the caller: a missing folder, an unreadable
sub-directory or a corrupt file all degrade to "contributes nothing"
and are reported through the log and the ``ReloadReport``.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Callable

from bankchat.cache.fingerprint import content_fingerprint, fingerprints_differ
from bankchat.cache.models import ContextSnapshot, DocumentCacheStats
from bankchat.cache.normalize import normalize_context_text
from bankchat.core.models import (
    DocumentFormat,
    FileExtraction,
    ReloadReport,
    UnsupportedFormatError,
)
from bankchat.extraction.extractor_factory import create_extractor, extract_document

if TYPE_CHECKING:
    from bankchat.config.settings import Settings
    from bankchat.extraction.base_extractor import BaseExtractor

logger = logging.getLogger(__name__)

ExtractorResolver = Callable[[DocumentFormat], "BaseExtractor"]
Clock = Callable[[], datetime]

DEFAULT_TTL = timedelta(hours=2)
DEFAULT_IGNORE_PREFIXES: tuple[str, ...] = ("~$",)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class SourceFile:
    """A supported document discovered under the documents folder."""

    path: Path
    name: str
    directory: str  # relative to the folder root, posix style, "" at the root
    format: DocumentFormat

    @property
    def relative_path(self) -> str:
        return f"{self.directory}/{self.name}" if self.directory else self.name

    @property
    def sort_key(self) -> tuple[str, str]:
        return (self.directory, self.name)

    @property
    def header(self) -> str:
        dir_info = f" ({self.directory})" if self.directory else ""
        return f"=== {self.name}{dir_info} ==="


class DocumentContextCache:
    """Time-to-live cache over the text of every DOCX/PDF under a folder.

    Args:
        documents_folder: Folder to read (sub-folders included).
        ttl: Maximum age of the cached text before the next read reloads it.
        ignore_prefixes: File-name prefixes of temp/lock files to skip.
        extractor_for: Resolves the extractor for a format (injectable).
        clock: Returns the current time (injectable).
    """

    def __init__(
        self,
        documents_folder: str | Path,
        ttl: timedelta | int | float = DEFAULT_TTL,
        ignore_prefixes: tuple[str, ...] | list[str] = DEFAULT_IGNORE_PREFIXES,
        extractor_for: ExtractorResolver = create_extractor,
        clock: Clock = _utcnow,
    ) -> None:
        self._root = Path(documents_folder).expanduser()
        self._ttl = ttl if isinstance(ttl, timedelta) else timedelta(seconds=ttl)
        self._ignore_prefixes = tuple(ignore_prefixes)
        self._extractor_for = extractor_for
        self._clock = clock

        self._snapshot: ContextSnapshot | None = None
        self._last_load: datetime | None = None
        self._reload_count = 0
        self._last_report: ReloadReport | None = None
        self._lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: object) -> DocumentContextCache:
        """Build a cache bound to the configured folder, TTL and temp prefixes."""
        return cls(
            documents_folder=settings.documents_folder,
            ttl=settings.document_cache_ttl_seconds,
            ignore_prefixes=settings.documents_ignore_prefixes_list,
            **kwargs,  # type: ignore[arg-type]
        )

    # --- State ---

    @property
    def documents_folder(self) -> Path:
        return self._root

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    @property
    def cached_text(self) -> str | None:
        return self._snapshot.text if self._snapshot else None

    @property
    def content_fingerprint(self) -> str | None:
        return self._snapshot.fingerprint if self._snapshot else None

    @property
    def last_load_timestamp(self) -> datetime | None:
        return self._last_load

    @property
    def reload_count(self) -> int:
        return self._reload_count

    @property
    def last_report(self) -> ReloadReport | None:
        return self._last_report

    def is_stale(self) -> bool:
        """Whether the next ``get_content`` call has to reload."""
        if self._snapshot is None or self._last_load is None:
            return True
        return self._clock() - self._last_load > self._ttl

    # --- Operations ---

    async def get_content(self) -> str:
        """Return the cached context text, reloading first when stale."""
        if self.is_stale():
            async with self._lock:
                # Another request may have reloaded while we waited
                if self.is_stale():
                    await self._reload()
        return self.cached_text or ""

    async def force_refresh(self) -> str:
        """Reload unconditionally, ignoring the time-to-live."""
        logger.info("Force refreshing document cache...")
        async with self._lock:
            await self._reload()
        content = self.cached_text or ""
        logger.info("Document cache force refreshed: %d characters", len(content))
        return content

    def stats(self) -> DocumentCacheStats:
        """Snapshot of the cache state for diagnostics."""
        age = None
        if self._last_load is not None:
            age = (self._clock() - self._last_load).total_seconds()
        text = self.cached_text or ""
        return DocumentCacheStats(
            documents_folder=self._root,
            ttl_seconds=int(self._ttl.total_seconds()),
            last_loaded=self._last_load,
            content_length=len(text),
            content_fingerprint=self.content_fingerprint,
            has_content=bool(text),
            cache_age_seconds=age,
            reload_count=self._reload_count,
            last_report=self._last_report,
        )

    # --- Reload ---

    async def _reload(self) -> None:
        started = self._clock()
        t0 = time.perf_counter()
        report = ReloadReport(started_at=started)
        logger.info("Loading documents from %s", self._root)

        try:
            text = await self._load_combined_text(report)
            fingerprint = content_fingerprint(text)
            report.fingerprint = fingerprint

            if fingerprints_differ(self.content_fingerprint, fingerprint):
                self._snapshot = ContextSnapshot(text=text, fingerprint=fingerprint)
                report.content_changed = True
                logger.info("Document content changed - updating cache")
            else:
                logger.info("Document content unchanged - reusing cache")
        except Exception:
            logger.exception("Document reload failed; keeping previous content")
        finally:
            self._last_load = started
            self._reload_count += 1
            report.content_length = len(self.cached_text or "")
            report.duration_ms = int((time.perf_counter() - t0) * 1000)
            self._last_report = report

        if report.content_length:
            logger.info("Cached %d characters of content", report.content_length)

    async def _load_combined_text(self, report: ReloadReport) -> str:
        """Extract every supported file in sorted order and normalize the result."""
        files = self.discover_files(report)
        report.files_found = len(files)
        if not files:
            return ""

        logger.info("Processing %d documents", len(files))
        parts: list[str] = []
        for source in files:
            extraction = await self._extract(source)
            if not extraction.ok:
                report.failures.append(extraction)
                continue
            report.files_processed += 1
            if extraction.text:
                parts.append(f"\n{source.header}\n{extraction.text}\n\n")
                logger.debug(
                    "Processed %s (%d chars)", source.relative_path, len(extraction.text)
                )

        logger.info(
            "Document processing complete: %d/%d files",
            report.files_processed, report.files_found,
        )
        return normalize_context_text("".join(parts))

    async def _extract(self, source: SourceFile) -> FileExtraction:
        try:
            extractor = self._extractor_for(source.format)
        except Exception as e:
            logger.error("No extractor for %s: %s", source.relative_path, e)
            return FileExtraction(
                relative_path=source.relative_path, format=source.format, error=str(e)
            )
        return await extract_document(
            source.path, source.format, source.relative_path, extractor=extractor
        )

    def discover_files(self, report: ReloadReport | None = None) -> list[SourceFile]:
        """List supported, non-temporary documents, sorted deterministically."""
        if not self._root.is_dir():
            logger.warning("Documents folder not found: %s", self._root)
            if report is not None:
                report.directory_missing = True
            return []

        found: list[SourceFile] = []
        try:
            for path in self._root.rglob("*"):
                if not path.is_file() or path.name.startswith(self._ignore_prefixes):
                    continue
                try:
                    fmt = DocumentFormat.from_extension(path.suffix)
                except UnsupportedFormatError:
                    continue
                directory = path.parent.relative_to(self._root).as_posix()
                found.append(
                    SourceFile(
                        path=path,
                        name=path.name,
                        directory="" if directory == "." else directory,
                        format=fmt,
                    )
                )
        except OSError as e:
            logger.error("Error reading directory %s: %s", self._root, e)

        if not found:
            logger.warning("No supported files found in: %s", self._root)
        return sorted(found, key=lambda f: f.sort_key)
