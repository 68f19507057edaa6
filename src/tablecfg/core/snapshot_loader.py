"""Full-table scan flattened into a configuration snapshot."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from .config_model import ConfigRow, ConfigSnapshot, TableSpec
from .errors import MalformedRowError, ScanError
from .ports import TableStore

logger = logging.getLogger(__name__)

NAME_ATTRIBUTE = "name"
VALUE_ATTRIBUTE = "value"


class SnapshotLoader:
    """Reads every row of the configuration table into a ConfigSnapshot.

    The table must already be ACTIVE (see ``TableProvisioner``). Scans are
    followed through every continuation token; rows are applied in scan
    order so a repeated ``name`` keeps the last value seen.
    """

    def __init__(self, spec: TableSpec):
        self._spec = spec

    def load_snapshot(self, client: TableStore) -> ConfigSnapshot:
        values: dict[str, str] = {}
        for row in self.iter_rows(client):
            if row.name in values:
                logger.debug("Key [%s] repeated in row [%s]; keeping later value", row.name, row.id)
            values[row.name] = row.value
        logger.debug("Loaded %d configuration keys from table [%s]", len(values), self._spec.table_name)
        return ConfigSnapshot(values)

    def iter_rows(self, client: TableStore) -> Iterator[ConfigRow]:
        """Yield rows across all scan pages, validating each one."""
        for item in self._iter_items(client):
            yield _to_row(item, self._spec.partition_key)

    def _iter_items(self, client: TableStore) -> Iterator[dict]:
        table_name = self._spec.table_name
        start_key = None
        page_number = 0
        while True:
            page_number += 1
            logger.debug("Scanning table [%s], page %d, start key [%s]", table_name, page_number, start_key)
            try:
                page = client.scan(table_name, start_key)
            except Exception as exc:
                raise ScanError(table_name, page_number, str(exc)) from exc
            logger.debug("Scanned page %d with %d items", page_number, len(page.items))

            yield from page.items

            start_key = page.last_evaluated_key
            if not start_key:
                return


def _to_row(item: dict, partition_key: str) -> ConfigRow:
    row_id = item.get(partition_key)
    for attribute in (NAME_ATTRIBUTE, VALUE_ATTRIBUTE):
        if not isinstance(item.get(attribute), str):
            raise MalformedRowError(row_id, attribute)
    return ConfigRow(id=row_id, name=item[NAME_ATTRIBUTE], value=item[VALUE_ATTRIBUTE])
