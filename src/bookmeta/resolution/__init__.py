"""Resolution layer for fetching and combining metadata from external sources."""

from bookmeta.resolution.aggregator import MultiResultAggregator
from bookmeta.resolution.base import (
    AbstractProvider,
    AbstractSearchProvider,
    ProviderAttempt,
    ProviderConfig,
)
from bookmeta.resolution.cascade import CascadeConfig, CascadeResolver, CascadeResult
from bookmeta.resolution.fast import FastDualLookup
from bookmeta.resolution.registry import ProviderDescriptor, ProviderRegistry

__all__ = [
    # Base
    "AbstractProvider",
    "AbstractSearchProvider",
    "ProviderAttempt",
    "ProviderConfig",
    # Orchestration
    "CascadeConfig",
    "CascadeResolver",
    "CascadeResult",
    "FastDualLookup",
    "MultiResultAggregator",
    # Registry
    "ProviderDescriptor",
    "ProviderRegistry",
]
