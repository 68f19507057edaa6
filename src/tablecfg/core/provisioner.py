"""Configuration table provisioning."""

from __future__ import annotations

import logging

from .config_model import TableDescription, TableSpec
from .errors import ProvisioningError
from .ports import TableStore

logger = logging.getLogger(__name__)


class TableProvisioner:
    """Guarantees the configuration table exists and is ACTIVE.

    Each step is idempotent on the service side, so concurrent bootstraps
    against the same table only do redundant work. Any failure is fatal and
    surfaces as ``ProvisioningError`` with the original exception chained.
    """

    def __init__(self, spec: TableSpec):
        self._spec = spec

    def ensure_table(self, client: TableStore, recreate: bool = False) -> TableDescription:
        """Create the table if needed and wait until it can serve reads.

        Args:
            client: Storage client for the configuration table.
            recreate: Delete any existing table first.

        Returns:
            The table description, for diagnostics.
        """
        spec = self._spec
        name = spec.table_name

        if recreate:
            logger.debug("Deleting table [%s] if it exists", name)
            deleted = self._step("delete", client.delete_table_if_exists, name)
            if deleted:
                logger.debug("Waiting until table [%s] is deleted...", name)
                self._step(
                    "wait for deletion",
                    client.wait_until_deleted,
                    name,
                    spec.wait_timeout,
                    spec.poll_interval,
                )

        logger.debug("Sending create request for table [%s]", name)
        created = self._step("create", client.create_table_if_absent, spec)
        if not created:
            logger.debug("Table [%s] already exists", name)

        logger.debug("Waiting until table [%s] becomes active...", name)
        self._step("wait for active", client.wait_until_active, name, spec.wait_timeout, spec.poll_interval)

        logger.debug("Requesting description of table [%s]", name)
        description = self._step("describe", client.describe_table, name)
        logger.debug("Located table with description: [%s]", description)
        return description

    def _step(self, step: str, fn, *args):
        try:
            return fn(*args)
        except Exception as exc:
            raise ProvisioningError(self._spec.table_name, step, str(exc)) from exc
