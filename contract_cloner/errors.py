"""Exceptions raised by Contract Cloner."""

from pathlib import Path


class CloneError(Exception):
    """Base class for every failure the CLI reports."""


class ResolutionError(CloneError):
    """The contract reference could not be turned into an address."""


class InvalidAddressError(ResolutionError):
    def __init__(self, token: str):
        super().__init__(f"Not a contract address or explorer URL: {token}")
        self.token = token


class InvalidAggregatorUrlError(ResolutionError):
    def __init__(self, url: str):
        super().__init__(
            f"Invalid Blockscan URL format: {url}. Expected: /[chain-name|chain-id]/contractAddress"
        )
        self.url = url


class UnsupportedDomainError(ResolutionError):
    def __init__(self, domain: str):
        super().__init__(f"Unsupported explorer domain: {domain}")
        self.domain = domain


class AddressNotFoundError(ResolutionError):
    def __init__(self, url: str):
        super().__init__(f"Contract address not found in URL: {url}")
        self.url = url


class FetchError(CloneError):
    """The source lookup service could not be reached or returned garbage."""


class NotFoundError(CloneError):
    """The source lookup service has no source for the contract."""


class DestinationNotEmptyError(CloneError):
    def __init__(self, destination: Path):
        super().__init__(
            f"Directory '{destination}' is not empty. "
            "Please use an empty directory or use --merge flag."
        )
        self.destination = destination


class TooManyConflictsError(CloneError):
    def __init__(self, path: Path, limit: int):
        super().__init__(f"Too many conflicts for {path} (tried {limit} alternative names)")
        self.path = path
        self.limit = limit


class ChainRegistryError(CloneError):
    """The chain registry file is missing or malformed."""
