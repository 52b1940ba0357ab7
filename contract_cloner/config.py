"""Runtime configuration read from the environment (and a local .env file)."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_SOURCE_HOST = "vscode.blockscan.com"
DEFAULT_CHAIN = "ethereum"


@dataclass(frozen=True)
class Settings:
    source_host: str = DEFAULT_SOURCE_HOST
    default_chain: str = DEFAULT_CHAIN
    chains_file: Optional[Path] = None
    request_timeout: Optional[float] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "Settings":
        """Build settings from CLONE_CONTRACT_* variables."""
        if load_env_file:
            load_dotenv()

        chains_file = os.getenv("CLONE_CONTRACT_CHAINS_FILE")
        timeout = os.getenv("CLONE_CONTRACT_TIMEOUT")

        return cls(
            source_host=os.getenv("CLONE_CONTRACT_SOURCE_HOST") or DEFAULT_SOURCE_HOST,
            default_chain=os.getenv("CLONE_CONTRACT_DEFAULT_CHAIN") or DEFAULT_CHAIN,
            chains_file=Path(chains_file) if chains_file else None,
            request_timeout=float(timeout) if timeout else None,
            log_level=(os.getenv("CLONE_CONTRACT_LOG_LEVEL") or "INFO").upper(),
        )
