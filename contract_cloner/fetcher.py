"""Fetch verified contract sources from the Blockscan source API."""

import json
import logging
from typing import Optional

import requests

from .config import Settings
from .errors import FetchError, NotFoundError
from .types import SourceBundle

logger = logging.getLogger(__name__)

DEFAULT_CONTRACT_NAME = "UnknownContract"
DEFAULT_EXTENSION = "sol"


def source_api_url(source_host: str, chain_identifier: str, address: str) -> str:
    return f"https://{source_host}/srcapi/{chain_identifier}/{address}"


def request_source(url: str, timeout: Optional[float] = None) -> dict:
    """GET the source API payload."""
    try:
        response = requests.get(url, headers={"accept": "application/json"}, timeout=timeout)
    except requests.RequestException as e:
        raise FetchError(f"Failed to reach source API: {e}") from e

    if response.status_code != 200:
        raise FetchError(f"Failed to fetch contract from API (HTTP {response.status_code}).")

    try:
        payload = response.json()
    except ValueError as e:
        raise FetchError(f"Source API returned invalid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise FetchError("Source API returned an unexpected payload.")
    return payload


def _unwrap_double_braces(source: str) -> str:
    # Etherscan-style standard JSON input is sometimes wrapped as {{...}}
    stripped = source.strip()
    if stripped.startswith("{{") and stripped.endswith("}}"):
        return stripped[1:-1]
    return source


def normalize_source(source: str, contract_name: Optional[str], ext: Optional[str]) -> SourceBundle:
    """
    Turn a raw source payload into a bundle.

    Standard JSON input yields one file per entry of ``sources`` plus
    ``settings.remappings``. Anything else is a single flattened file named
    after the contract.
    """
    try:
        result = json.loads(_unwrap_double_braces(source))
    except json.JSONDecodeError:
        result = None

    sources = result.get("sources") if isinstance(result, dict) else None
    if isinstance(sources, dict) and sources:
        files = {}
        for path, entry in sources.items():
            content = entry.get("content") if isinstance(entry, dict) else entry
            files[path] = content if isinstance(content, str) else ""

        settings = result.get("settings")
        remappings = settings.get("remappings") if isinstance(settings, dict) else None

        return SourceBundle(
            contract_name=contract_name,
            files=files,
            remappings=[r if r is not None else "" for r in remappings] if remappings else None,
        )

    return SourceBundle(
        contract_name=contract_name,
        files={f"{contract_name or DEFAULT_CONTRACT_NAME}.{ext or DEFAULT_EXTENSION}": source},
    )


def fetch_source(address: str, chain_identifier: str, settings: Settings) -> SourceBundle:
    """
    Fetch the source bundle of a contract.

    For proxies the implementation contract's source is returned, not the
    proxy's own.
    """
    url = source_api_url(settings.source_host, chain_identifier, address)
    logger.debug(f"GET {url}")
    api = request_source(url, timeout=settings.request_timeout)

    if api.get("proxyAddress"):
        logger.info(f"Proxy detected, using implementation at {api['proxyAddress']}")
        source, contract_name, ext = api.get("proxyResult"), api.get("proxyContractName"), api.get("proxyExt")
    else:
        source, contract_name, ext = api.get("result"), api.get("contractName"), api.get("ext")

    if not source or not isinstance(source, str):
        raise NotFoundError(f"No source found for {address} on chain {chain_identifier}")

    bundle = normalize_source(source, contract_name, ext)
    logger.info(f"Extracted {len(bundle.files)} source file(s) for contract {contract_name or address}.")
    return bundle
