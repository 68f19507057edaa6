"""Core configuration model (structured view)."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class TableSpec:
    """Fixed shape of the configuration table.

    Attributes:
        table_name: Name of the DynamoDB table holding configuration rows
        partition_key: Hash key attribute (string typed)
        read_capacity_units: Provisioned read throughput
        write_capacity_units: Provisioned write throughput
        wait_timeout: Seconds to wait for the table to become ACTIVE
        poll_interval: Seconds between status polls
        recreate: Delete and recreate the table on bootstrap
    """

    table_name: str = "DynamoDbCasProperties"
    partition_key: str = "id"
    read_capacity_units: int = 10
    write_capacity_units: int = 10
    wait_timeout: float = 600.0
    poll_interval: float = 20.0
    recreate: bool = False

    def create_table_request(self) -> dict[str, Any]:
        """Keyword arguments for the CreateTable call."""
        return {
            "TableName": self.table_name,
            "AttributeDefinitions": [
                {"AttributeName": self.partition_key, "AttributeType": "S"},
            ],
            "KeySchema": [
                {"AttributeName": self.partition_key, "KeyType": "HASH"},
            ],
            "ProvisionedThroughput": {
                "ReadCapacityUnits": self.read_capacity_units,
                "WriteCapacityUnits": self.write_capacity_units,
            },
        }


@dataclass(frozen=True)
class Credentials:
    access_key: str
    secret_key: str

    def __repr__(self) -> str:
        return f"Credentials(access_key={self.access_key!r}, secret_key='***')"


@dataclass(frozen=True)
class ClientSettings:
    """Resolved settings used to build the storage client.

    Optional fields are None when the corresponding setting was blank.
    """

    credentials: Credentials
    local_address: str | None = None
    endpoint_url: str | None = None
    region: str | None = None
    signing_region: str | None = None


@dataclass(frozen=True)
class ConfigRow:
    id: str
    name: str
    value: str


@dataclass(frozen=True)
class ScanPage:
    """One page of scan results with its continuation token."""

    items: list[dict[str, Any]] = field(default_factory=list)
    last_evaluated_key: dict[str, Any] | None = None


@dataclass(frozen=True)
class TableDescription:
    """Diagnostic view of a table as reported by the service."""

    table_name: str
    status: str
    item_count: int | None = None
    key_schema: tuple[tuple[str, str], ...] = ()
    read_capacity_units: int | None = None
    write_capacity_units: int | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def is_active(self) -> bool:
        return self.status == "ACTIVE"

    @classmethod
    def from_response(cls, table: dict[str, Any]) -> TableDescription:
        """Build from the ``Table`` member of a DescribeTable response."""
        throughput = table.get("ProvisionedThroughput") or {}
        return cls(
            table_name=table["TableName"],
            status=table.get("TableStatus", "UNKNOWN"),
            item_count=table.get("ItemCount"),
            key_schema=tuple(
                (element["AttributeName"], element["KeyType"])
                for element in table.get("KeySchema", [])
            ),
            read_capacity_units=throughput.get("ReadCapacityUnits"),
            write_capacity_units=throughput.get("WriteCapacityUnits"),
            raw=table,
        )


class ConfigSnapshot(Mapping[str, str]):
    """Read-only key -> value view built once per bootstrap."""

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, str] | None = None):
        self._values = dict(values or {})

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ConfigSnapshot({self._values!r})"

    def to_dict(self) -> dict[str, str]:
        """Return a mutable copy."""
        return dict(self._values)
