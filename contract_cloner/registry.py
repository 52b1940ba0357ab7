"""Chain registry: explorer hostname -> chain ID.

The bundled ``data/chains.json`` is generated from the public chain list
published at chainid.network (see ``build_chain_registry``).
"""

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping, Optional
from urllib.parse import urlsplit

import requests

from .errors import ChainRegistryError

logger = logging.getLogger(__name__)

BUNDLED_CHAINS_FILE = Path(__file__).parent / "data" / "chains.json"
CHAIN_LIST_URL = "https://chainid.network/chains.json"


def load_chain_registry(path: Optional[Path] = None) -> Mapping[str, int]:
    """Load the hostname -> chain ID table as a read-only mapping."""
    path = Path(path) if path else BUNDLED_CHAINS_FILE
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ChainRegistryError(f"Chain registry {path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ChainRegistryError(f"Chain registry {path} must be a JSON object")
    return MappingProxyType(data)


def fetch_chain_list(url: str = CHAIN_LIST_URL, timeout: Optional[float] = 30) -> list[dict]:
    """Download the public chain list."""
    response = requests.get(url, headers={"accept": "application/json"}, timeout=timeout)
    response.raise_for_status()
    return response.json()


def build_chain_registry(chains: Iterable[dict]) -> dict[str, int]:
    """
    Map each chain's default explorer hostname to its chain ID.

    Only the first explorer of a chain counts as its default. Chains without
    an ID or a parseable explorer URL are skipped. Later chains win on
    duplicate hostnames.
    """
    registry = {}
    for chain in chains:
        chain_id = chain.get("chainId")
        explorers = chain.get("explorers") or []
        if not chain_id or not explorers:
            continue

        url = explorers[0].get("url")
        if not url:
            continue
        try:
            domain = urlsplit(url).hostname
        except ValueError:
            continue
        if not domain:
            continue

        registry[domain] = chain_id
        logger.debug(f"Extracted: {chain.get('name')} ({chain_id}) -> {domain}")

    return registry


def write_chain_registry(registry: Mapping[str, int], path: Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(dict(registry), f, indent=2)
        f.write("\n")
