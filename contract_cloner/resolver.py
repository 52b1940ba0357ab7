"""Turn a contract reference (address, explorer URL, Blockscan URL) into a target."""

import logging
import re
from typing import Callable, Mapping, Optional
from urllib.parse import SplitResult, urlsplit

from .errors import (
    AddressNotFoundError,
    InvalidAddressError,
    InvalidAggregatorUrlError,
    UnsupportedDomainError,
)
from .types import ExplorerKind, ResolvedTarget

logger = logging.getLogger(__name__)

ADDR_RE = re.compile(r"^0x[a-fA-F0-9]{40}$")

# vscode.blockscan.com/[chain-name|chain-id]/contractAddress
AGGREGATOR_HOST = "vscode.blockscan.com"

# Path segments that precede the address on most explorers:
# /address/0x..., /token/0x..., /contract/0x...
ADDRESS_MARKERS = ("address", "token", "contract")


def is_address(value: str) -> bool:
    return bool(ADDR_RE.match(value))


def _parse_url(token: str) -> Optional[SplitResult]:
    """Return the split URL, or None when the token is not a URL."""
    try:
        parsed = urlsplit(token)
    except ValueError:
        return None
    if not parsed.scheme or not parsed.netloc:
        return None
    return parsed


def _path_segments(parsed: SplitResult) -> list[str]:
    return [segment for segment in parsed.path.split("/") if segment]


def classify_host(hostname: str) -> ExplorerKind:
    if hostname == AGGREGATOR_HOST:
        return ExplorerKind.AGGREGATOR
    return ExplorerKind.GENERIC_EXPLORER


def _resolve_aggregator(parsed: SplitResult, registry: Mapping[str, int]) -> ResolvedTarget:
    # The chain segment is passed through verbatim; Blockscan accepts names and IDs.
    segments = _path_segments(parsed)
    if len(segments) < 2 or not is_address(segments[1]):
        raise InvalidAggregatorUrlError(parsed.geturl())

    return ResolvedTarget(contract_address=segments[1], chain_identifier=segments[0])


def _resolve_generic(parsed: SplitResult, registry: Mapping[str, int]) -> ResolvedTarget:
    domain = parsed.hostname or ""
    chain_id = registry.get(domain)
    if not chain_id:
        raise UnsupportedDomainError(domain)

    segments = _path_segments(parsed)
    contract_address = find_address_in_segments(segments)
    if not contract_address:
        raise AddressNotFoundError(parsed.geturl())

    logger.info(f"Detected Chain: {chain_id}")
    logger.info(f"Contract: {contract_address}")

    return ResolvedTarget(contract_address=contract_address, chain_identifier=str(chain_id))


def find_address_in_segments(segments: list[str]) -> Optional[str]:
    """
    Pick the contract address out of an explorer URL path.

    The segment following an address marker wins, whatever it looks like.
    Without a marker, fall back to the first address-shaped segment.
    """
    for index, segment in enumerate(segments[:-1]):
        if segment.lower() in ADDRESS_MARKERS:
            return segments[index + 1]

    return next((segment for segment in segments if is_address(segment)), None)


RESOLVERS: dict[ExplorerKind, Callable[[SplitResult, Mapping[str, int]], ResolvedTarget]] = {
    ExplorerKind.AGGREGATOR: _resolve_aggregator,
    ExplorerKind.GENERIC_EXPLORER: _resolve_generic,
}


def resolve(token: str, registry: Mapping[str, int]) -> ResolvedTarget:
    """
    Resolve a command-line contract reference.

    A bare address resolves to itself with no chain. A URL is dispatched on
    its hostname: Blockscan URLs carry the chain in the path, every other
    explorer needs its hostname in the chain registry.
    """
    parsed = _parse_url(token)
    if parsed is None:
        if not is_address(token):
            raise InvalidAddressError(token)
        return ResolvedTarget(contract_address=token)

    kind = classify_host(parsed.hostname or "")
    return RESOLVERS[kind](parsed, registry)


def effective_chain(
    target: ResolvedTarget,
    requested_chain: Optional[str],
    default_chain: str,
) -> str:
    """Chain to query: the URL's chain, then the --chain option, then the default."""
    return target.chain_identifier or requested_chain or default_chain
