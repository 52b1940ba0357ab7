#!/usr/bin/env python3
"""CLI interface for Contract Cloner."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
import requests

from .config import Settings
from .errors import CloneError
from .fetcher import fetch_source
from .formatters import format_report, format_report_json, format_target
from .materializer import materialize
from .registry import (
    CHAIN_LIST_URL,
    BUNDLED_CHAINS_FILE,
    build_chain_registry,
    fetch_chain_list,
    load_chain_registry,
    write_chain_registry,
)
from .resolver import effective_chain, resolve
from .types import MaterializationPolicy, MaterializationReport

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

EXAMPLES = """\b
Examples:
  clone-contract 0x1234...abcd                                    # Save to ./ContractName
  clone-contract 0x1234...abcd ./contracts                        # Save to ./contracts
  clone-contract --chain polygon 0x1234...abcd                    # Use polygon chain
  clone-contract --chain 137 0x1234...abcd ./contracts            # Use chain ID 137
  clone-contract -m 0x1234...abcd ./existing-dir                  # Merge into existing directory
  clone-contract https://etherscan.io/address/0x1234...abcd       # From Etherscan URL
  clone-contract https://vscode.blockscan.com/5000/0x1234...abcd  # From Blockscan URL
"""


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(message)s",
        handlers=[logging.StreamHandler()],
    )


def default_output_root(contract_name: Optional[str], address: str) -> Path:
    return Path(".") / (contract_name or f"Contract_{address[:8]}")


def clone_contract(
    contract: str,
    directory: Optional[Path],
    chain: Optional[str],
    merge: bool,
    settings: Settings,
) -> MaterializationReport:
    """Resolve, fetch and write one contract. Raises CloneError on failure."""
    registry = load_chain_registry(settings.chains_file)
    target = resolve(contract, registry)
    chain_identifier = effective_chain(target, chain, settings.default_chain)

    click.echo(format_target(target, chain_identifier), err=True)

    bundle = fetch_source(target.contract_address, chain_identifier, settings)

    output_root = directory or default_output_root(bundle.contract_name, target.contract_address)
    policy = MaterializationPolicy.MERGE if merge else MaterializationPolicy.STRICT
    return materialize(bundle, output_root, policy)


@click.command(context_settings=CONTEXT_SETTINGS, epilog=EXAMPLES)
@click.version_option(version="1.0.0")
@click.argument("contract")
@click.argument("directory", required=False, type=click.Path(file_okay=False, path_type=Path))
@click.option(
    "--chain",
    metavar="<name|id>",
    help="Blockchain network name or chain ID (default: ethereum). Ignored for explorer URLs.",
)
@click.option(
    "-m", "--merge",
    is_flag=True,
    help="Allow merging into non-empty directories: identical files are skipped, "
         "conflicting files are saved with a .conflict suffix.",
)
@click.option(
    "-f", "--format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format for the summary",
)
def cli(contract: str, directory: Optional[Path], chain: Optional[str], merge: bool, format: str):
    """Download the verified source of CONTRACT into DIRECTORY.

    CONTRACT is a contract address or a block explorer URL. DIRECTORY
    defaults to ./{ContractName}.
    """
    settings = Settings.from_env()
    setup_logging(settings.log_level)

    try:
        report = clone_contract(contract, directory, chain, merge, settings)
    except (CloneError, OSError) as e:
        click.echo(f"❌ Error: {e}", err=True)
        sys.exit(1)

    if format == "json":
        click.echo(format_report_json(report))
    else:
        click.echo(format_report(report))


@click.command(context_settings=CONTEXT_SETTINGS)
@click.option("-s", "--source", default=CHAIN_LIST_URL, show_default=True, help="Chain list URL")
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=BUNDLED_CHAINS_FILE,
    help="Where to write the registry (default: the bundled chains.json)",
)
def extract_chains(source: str, output: Path):
    """Regenerate the explorer-domain -> chain ID registry."""
    settings = Settings.from_env()
    setup_logging(settings.log_level)

    click.echo(f"Reading chains from: {source}", err=True)
    try:
        chains = fetch_chain_list(source, timeout=settings.request_timeout)
    except (requests.RequestException, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    registry = build_chain_registry(chains)
    write_chain_registry(registry, output)
    click.echo(f"✅ Extracted {len(registry)} chains to {output}")


def main():
    cli()


if __name__ == "__main__":
    main()
