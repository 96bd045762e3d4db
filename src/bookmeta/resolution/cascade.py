"""Tiered cascade resolver for full-coverage identifier lookups."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from bookmeta.core.merge import merge_records, missing_fields, populated_fields
from bookmeta.core.models import BookRecord
from bookmeta.core.types import ProgressCallback, ResolutionStatus
from bookmeta.resolution.base import ProviderAttempt

if TYPE_CHECKING:
    from bookmeta.resolution.registry import ProviderDescriptor

logger = logging.getLogger(__name__)


@dataclass
class CascadeConfig:
    """Configuration for cascade resolution."""

    # Per-call timeout (seconds); a slower provider counts as "no data"
    provider_timeout: float = 8.0

    # Tiers visited, in order
    tiers: tuple[int, ...] = (1, 2, 3, 4)

    # Stop once every important field is populated
    stop_when_complete: bool = True


@dataclass
class CascadeResult:
    """Merged record plus a trace of every provider considered."""

    record: BookRecord | None = None
    attempts: list[ProviderAttempt] = field(default_factory=list)
    tiers_run: list[int] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.record is not None

    @property
    def sources_tried(self) -> list[str]:
        return [a.source for a in self.attempts if a.status != ResolutionStatus.SKIPPED]


def report_progress(
    on_progress: ProgressCallback | None,
    current: int,
    total: int,
    message: str,
) -> None:
    """Invoke a progress sink; a failing sink never affects resolution."""
    if on_progress is None:
        return
    try:
        on_progress(current, total, message)
    except Exception:
        logger.exception("Progress callback failed")


class CascadeResolver:
    """
    Resolves one identifier across every registered provider, tier by tier.

    Within a tier all providers run concurrently, each bounded by the
    per-call timeout. The tier is a barrier: results are merged only after
    every call settled, and always in declared provider order so identical
    responses give identical output. When no important field is missing
    after a tier, later tiers are never invoked.
    """

    def __init__(
        self,
        providers: Sequence[ProviderDescriptor],
        config: CascadeConfig | None = None,
    ) -> None:
        self._providers = list(providers)
        self.config = config or CascadeConfig()

    @property
    def providers(self) -> list[ProviderDescriptor]:
        return list(self._providers)

    def _tier(self, tier: int) -> list[ProviderDescriptor]:
        return [d for d in self._providers if d.priority_tier == tier and d.provider.is_enabled]

    async def resolve(
        self,
        isbn: str,
        on_progress: ProgressCallback | None = None,
    ) -> CascadeResult:
        """Resolve ``isbn``; ``result.record`` is ``None`` when nothing was found."""
        result = CascadeResult()
        merged = BookRecord()
        found_any = False

        total = sum(len(self._tier(t)) for t in self.config.tiers)
        index = 0

        for tier in self.config.tiers:
            batch = self._tier(tier)
            if not batch:
                continue

            result.tiers_run.append(tier)
            logger.debug(f"Cascade tier {tier}: {[d.name for d in batch]}")

            calls = []
            for descriptor in batch:
                index += 1
                report_progress(on_progress, index, total, descriptor.name)
                calls.append(
                    descriptor.provider.attempt(isbn, timeout=self.config.provider_timeout)
                )

            # gather preserves argument order, which is declared order
            outcomes = await asyncio.gather(*calls)

            for descriptor, (record, attempt) in zip(batch, outcomes):
                result.attempts.append(attempt)
                if record is None:
                    continue

                found_any = True
                before = populated_fields(merged)
                merged = merge_records(merged, record, descriptor.name)
                if populated_fields(merged) > before and descriptor.name not in merged.data_sources:
                    merged.data_sources.append(descriptor.name)

            missing = missing_fields(merged)
            if self.config.stop_when_complete and not missing:
                logger.info(f"All important fields populated after tier {tier}, stopping cascade")
                break
            logger.debug(f"Still missing after tier {tier}: {', '.join(missing)}")

        if not found_any:
            logger.info(f"No provider returned data for {isbn}")
            return result

        merged.isbn = merged.isbn or isbn
        result.record = merged
        logger.info(f"Resolved {isbn} from {merged.data_sources}")
        return result
