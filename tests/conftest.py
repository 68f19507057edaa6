import pytest

from tablecfg.core.config_model import ScanPage, TableDescription, TableSpec
from tablecfg.core.ports import TableStore


class InMemoryTableStore(TableStore):
    """TableStore double keeping tables in a dict.

    ``page_size`` splits scans into pages keyed by the last row id, and
    ``failures`` maps a method name to an exception it should raise.
    """

    def __init__(self, page_size=None, failures=None):
        self.tables = {}
        self.page_size = page_size
        self.failures = dict(failures or {})
        self.calls = []

    def _record(self, name, *args):
        self.calls.append((name, *args))
        if name in self.failures:
            raise self.failures[name]

    def add_table(self, spec, rows=(), status="ACTIVE"):
        self.tables[spec.table_name] = {"spec": spec, "status": status, "rows": list(rows)}

    def call_names(self):
        return [call[0] for call in self.calls]

    def create_table_if_absent(self, spec):
        self._record("create_table_if_absent", spec.table_name)
        if spec.table_name in self.tables:
            return False
        self.add_table(spec, status="CREATING")
        return True

    def delete_table_if_exists(self, table_name):
        self._record("delete_table_if_exists", table_name)
        if table_name not in self.tables:
            return False
        self.tables[table_name]["status"] = "DELETING"
        return True

    def wait_until_active(self, table_name, timeout, poll_interval):
        self._record("wait_until_active", table_name, timeout, poll_interval)
        self.tables[table_name]["status"] = "ACTIVE"

    def wait_until_deleted(self, table_name, timeout, poll_interval):
        self._record("wait_until_deleted", table_name, timeout, poll_interval)
        del self.tables[table_name]

    def describe_table(self, table_name):
        self._record("describe_table", table_name)
        table = self.tables[table_name]
        spec = table["spec"]
        return TableDescription(
            table_name=table_name,
            status=table["status"],
            item_count=len(table["rows"]),
            key_schema=((spec.partition_key, "HASH"),),
            read_capacity_units=spec.read_capacity_units,
            write_capacity_units=spec.write_capacity_units,
        )

    def scan(self, table_name, exclusive_start_key=None):
        self._record("scan", table_name, exclusive_start_key)
        rows = self.tables[table_name]["rows"]
        start = 0
        if exclusive_start_key:
            ids = [row.get("id") for row in rows]
            start = ids.index(exclusive_start_key["id"]) + 1
        if self.page_size is None:
            return ScanPage(items=list(rows[start:]))
        page = rows[start:start + self.page_size]
        last_key = None
        if start + self.page_size < len(rows):
            last_key = {"id": page[-1]["id"]}
        return ScanPage(items=list(page), last_evaluated_key=last_key)


@pytest.fixture
def spec():
    return TableSpec(table_name="TestProperties", wait_timeout=5, poll_interval=1)


@pytest.fixture
def store():
    return InMemoryTableStore()
