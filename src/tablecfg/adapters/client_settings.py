"""Env configuration adapter producing ClientSettings and TableSpec."""

from __future__ import annotations

import logging
import socket
import warnings

import boto3

from ..config import Config, config as default_config
from ..core.config_model import ClientSettings, Credentials, TableSpec
from ..core.errors import ClientConfigurationError, ConfigurationWarning

logger = logging.getLogger(__name__)

SERVICE_NAME = "dynamodb"


def load_table_spec(cfg: Config | None = None) -> TableSpec:
    """Build the TableSpec; numeric settings must be positive numbers.

    Raises:
        ClientConfigurationError: a numeric setting is malformed.
    """
    cfg = cfg or default_config
    return TableSpec(
        table_name=cfg.TABLE_NAME,
        read_capacity_units=_positive("READ_CAPACITY", cfg.READ_CAPACITY, int),
        write_capacity_units=_positive("WRITE_CAPACITY", cfg.WRITE_CAPACITY, int),
        wait_timeout=_positive("WAIT_TIMEOUT", cfg.WAIT_TIMEOUT, float),
        poll_interval=_positive("POLL_INTERVAL", cfg.POLL_INTERVAL, float),
        recreate=cfg.RECREATE_TABLE,
    )


def _positive(key: str, value: str, kind):
    try:
        number = kind(value)
    except ValueError as exc:
        raise ClientConfigurationError(f"{key} must be a number, got {value!r}") from exc
    if number <= 0:
        raise ClientConfigurationError(f"{key} must be positive, got {value!r}")
    return number


def load_client_settings(cfg: Config | None = None) -> ClientSettings:
    """Resolve client settings; blank optional values are left unset.

    Raises:
        ClientConfigurationError: credentials missing or region unknown.
    """
    cfg = cfg or default_config

    if not cfg.CREDENTIAL_ACCESS_KEY or not cfg.CREDENTIAL_SECRET_KEY:
        raise ClientConfigurationError(
            "Both CREDENTIAL_ACCESS_KEY and CREDENTIAL_SECRET_KEY must be set"
        )

    return ClientSettings(
        credentials=Credentials(cfg.CREDENTIAL_ACCESS_KEY, cfg.CREDENTIAL_SECRET_KEY),
        local_address=resolve_local_address(cfg.LOCAL_ADDRESS),
        endpoint_url=cfg.ENDPOINT or None,
        region=normalize_region(cfg.REGION) if cfg.REGION else None,
        signing_region=cfg.REGION_OVERRIDE or None,
    )


def resolve_local_address(value: str) -> str | None:
    """Resolve a host name or address; failures only warn."""
    if not value:
        return None
    try:
        address = socket.gethostbyname(value)
    except (OSError, UnicodeError) as exc:
        message = f"Unable to resolve local address {value!r}: {exc}"
        logger.warning(message)
        warnings.warn(message, ConfigurationWarning, stacklevel=2)
        return None
    logger.debug("Resolved local address [%s] to [%s]", value, address)
    return address


def normalize_region(value: str) -> str:
    """Accept ``us-east-1`` or ``US_EAST_1`` and validate against known regions."""
    region = value.strip().lower().replace("_", "-")
    if region not in known_regions():
        raise ClientConfigurationError(f"Unknown region {value!r}")
    return region


def known_regions() -> set[str]:
    session = boto3.session.Session()
    regions: set[str] = set()
    for partition in session.get_available_partitions():
        regions.update(session.get_available_regions(SERVICE_NAME, partition_name=partition))
    return regions
