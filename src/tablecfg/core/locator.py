"""Core orchestration for tablecfg.

Keeps the provision -> wait -> scan -> flatten sequence in one place,
decoupled from the storage service via the ``TableStore`` port.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging

from .config_model import TableDescription, TableSpec
from .errors import BootstrapError
from .ports import TableStore
from .property_source import PropertySource
from .provisioner import TableProvisioner
from .snapshot_loader import SnapshotLoader
from .state_machine import BootstrapEvent, BootstrapState, BootstrapStateMachine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BootstrapOutcome:
    """Result of a bootstrap attempt: a property source or the error."""

    property_source: PropertySource | None = None
    error: BootstrapError | None = None
    table: TableDescription | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ConfigLocator:
    """Locates the remote configuration and exposes it as a PropertySource."""

    def __init__(
        self,
        spec: TableSpec | None = None,
        provisioner: TableProvisioner | None = None,
        loader: SnapshotLoader | None = None,
    ):
        self._spec = spec or TableSpec()
        self._provisioner = provisioner or TableProvisioner(self._spec)
        self._loader = loader or SnapshotLoader(self._spec)
        self._state = BootstrapStateMachine()
        self._table: TableDescription | None = None

    @property
    def state(self) -> BootstrapState:
        return self._state.state

    @property
    def source_name(self) -> str:
        return type(self).__name__

    def locate(self, client: TableStore) -> PropertySource:
        """Provision the table and load it into a property source.

        Raises:
            BootstrapError: Any provisioning, scan or row failure, or a
                bootstrap already running on this locator.
        """
        if self._state.finished:
            self._state.transition(BootstrapEvent.RESET)
        if not self._state.transition(BootstrapEvent.START):
            raise BootstrapError(f"Bootstrap already in progress ({self._state.state.name})")
        self._table = None
        try:
            self._table = self._provisioner.ensure_table(client, recreate=self._spec.recreate)
            self._state.transition(BootstrapEvent.TABLE_READY)

            snapshot = self._loader.load_snapshot(client)
            self._state.transition(BootstrapEvent.SNAPSHOT_LOADED)
        except Exception:
            self._state.transition(BootstrapEvent.ERROR)
            raise

        logger.info(
            "Loaded %d properties from table [%s]", len(snapshot), self._spec.table_name
        )
        return PropertySource(self.source_name, snapshot)

    def try_locate(self, client: TableStore) -> BootstrapOutcome:
        """Like ``locate`` but returns the failure instead of raising it."""
        try:
            source = self.locate(client)
        except BootstrapError as exc:
            logger.error("Configuration bootstrap failed: %s", exc)
            return BootstrapOutcome(error=exc, table=self._table)
        return BootstrapOutcome(property_source=source, table=self._table)
