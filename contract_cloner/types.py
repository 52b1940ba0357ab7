"""Type definitions for Contract Cloner."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


class ExplorerKind(Enum):
    """How a URL host encodes the contract it points to."""
    AGGREGATOR = "aggregator"
    GENERIC_EXPLORER = "generic_explorer"


class MaterializationPolicy(Enum):
    """What to do with a destination that already holds files."""
    STRICT = "strict"
    MERGE = "merge"


class WriteOutcome(Enum):
    WRITTEN = "written"
    SKIPPED_IDENTICAL = "skipped"
    CONFLICT = "conflict"


@dataclass(frozen=True)
class ResolvedTarget:
    """Contract address plus the chain it lives on, if the reference named one."""
    contract_address: str
    chain_identifier: Optional[str] = None  # chain name or numeric chain ID


@dataclass
class SourceBundle:
    """Normalized source files returned by the lookup service."""
    contract_name: Optional[str]
    files: dict[str, str]  # relative path -> content
    remappings: Optional[list[str]] = None


@dataclass(frozen=True)
class WriteResult:
    """Result of writing one logical file."""
    relative_path: str
    path: Path  # where the content actually landed
    outcome: WriteOutcome


@dataclass
class MaterializationReport:
    """Result of writing a whole bundle."""
    destination: Path
    policy: MaterializationPolicy
    results: list[WriteResult] = field(default_factory=list)

    def _with_outcome(self, outcome: WriteOutcome) -> list[WriteResult]:
        return [r for r in self.results if r.outcome is outcome]

    @property
    def written(self) -> list[WriteResult]:
        return self._with_outcome(WriteOutcome.WRITTEN)

    @property
    def skipped(self) -> list[WriteResult]:
        return self._with_outcome(WriteOutcome.SKIPPED_IDENTICAL)

    @property
    def conflicts(self) -> list[WriteResult]:
        return self._with_outcome(WriteOutcome.CONFLICT)
