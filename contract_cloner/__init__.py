"""Contract Cloner - Download verified smart contract sources into a local file tree."""

from .resolver import (
    resolve,
    effective_chain,
    classify_host,
)
from .fetcher import (
    fetch_source,
    normalize_source,
)
from .materializer import (
    materialize,
    write_source_with_merge,
)
from .registry import (
    load_chain_registry,
    build_chain_registry,
)
from .types import (
    ExplorerKind,
    MaterializationPolicy,
    MaterializationReport,
    ResolvedTarget,
    SourceBundle,
    WriteOutcome,
    WriteResult,
)
from .errors import (
    CloneError,
    ResolutionError,
    InvalidAddressError,
    InvalidAggregatorUrlError,
    UnsupportedDomainError,
    AddressNotFoundError,
    FetchError,
    NotFoundError,
    DestinationNotEmptyError,
    TooManyConflictsError,
    ChainRegistryError,
)

__version__ = "1.0.0"
__all__ = [
    "resolve",
    "effective_chain",
    "classify_host",
    "fetch_source",
    "normalize_source",
    "materialize",
    "write_source_with_merge",
    "load_chain_registry",
    "build_chain_registry",
    "ExplorerKind",
    "MaterializationPolicy",
    "MaterializationReport",
    "ResolvedTarget",
    "SourceBundle",
    "WriteOutcome",
    "WriteResult",
    "CloneError",
    "ResolutionError",
    "InvalidAddressError",
    "InvalidAggregatorUrlError",
    "UnsupportedDomainError",
    "AddressNotFoundError",
    "FetchError",
    "NotFoundError",
    "DestinationNotEmptyError",
    "TooManyConflictsError",
    "ChainRegistryError",
]
