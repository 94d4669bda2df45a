from __future__ import annotations


class DomainError(Exception):
    """Base for domain errors."""


class PoolNotFoundError(DomainError):
    """Requested pool is not in the current snapshot."""


class InvalidAccountError(DomainError):
    """Wallet account identifier is malformed."""


class UnknownPoolKindError(DomainError):
    """Pool collection name is not recognised."""


class DataSourceError(DomainError):
    """External data source could not deliver a usable payload."""
