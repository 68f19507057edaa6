"""DynamoDB adapter implementing the TableStore port with boto3."""

from __future__ import annotations

import logging
import math
from typing import Any

import boto3
from boto3.dynamodb.types import TypeDeserializer
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from ..core.config_model import ClientSettings, ScanPage, TableDescription, TableSpec
from ..core.errors import ClientConfigurationError

logger = logging.getLogger(__name__)

# The bootstrap never retries; a failed call aborts startup.
_BOTO_CONFIG = BotoConfig(retries={"total_max_attempts": 1})

# Region used when neither the settings nor the AWS environment name one.
DEFAULT_REGION = "us-east-1"


def create_dynamodb_client(settings: ClientSettings, boto_config: BotoConfig | None = None):
    """Build a low-level DynamoDB client from resolved settings.

    A blank region falls back to the AWS environment or config file, then
    to ``DEFAULT_REGION``. When a signing region override is set, requests
    still go to the endpoint chosen by ``endpoint_url``/``region`` but are
    signed for the override region.
    """
    boto_config = boto_config or _BOTO_CONFIG
    session = boto3.session.Session(
        aws_access_key_id=settings.credentials.access_key,
        aws_secret_access_key=settings.credentials.secret_key,
    )
    region = settings.region or session.region_name or DEFAULT_REGION
    try:
        client = session.client(
            "dynamodb",
            region_name=region,
            endpoint_url=settings.endpoint_url,
            config=boto_config,
        )
        if settings.signing_region:
            endpoint_url = client.meta.endpoint_url
            logger.debug("Signing requests to [%s] for region [%s]", endpoint_url, settings.signing_region)
            client = session.client(
                "dynamodb",
                region_name=settings.signing_region,
                endpoint_url=endpoint_url,
                config=boto_config,
            )
    except BotoCoreError as exc:
        raise ClientConfigurationError(f"Unable to build DynamoDB client: {exc}") from exc

    if settings.local_address:
        logger.debug("Local address [%s] resolved but not bound by the transport", settings.local_address)
    logger.debug("Created DynamoDB client for endpoint [%s]", client.meta.endpoint_url)
    return client


def _error_code(exc: ClientError) -> str:
    return exc.response.get("Error", {}).get("Code", "")


def _waiter_config(timeout: float, poll_interval: float) -> dict[str, int]:
    delay = max(1, int(poll_interval))
    return {"Delay": delay, "MaxAttempts": max(1, math.ceil(timeout / delay))}


class DynamoDbTableStore:
    """TableStore backed by a boto3 low-level client."""

    def __init__(self, client, deserializer: TypeDeserializer | None = None):
        self._client = client
        self._deserializer = deserializer or TypeDeserializer()

    @classmethod
    def from_settings(cls, settings: ClientSettings) -> DynamoDbTableStore:
        return cls(create_dynamodb_client(settings))

    def create_table_if_absent(self, spec: TableSpec) -> bool:
        request = spec.create_table_request()
        logger.debug("Sending create request [%s]", request)
        try:
            self._client.create_table(**request)
        except ClientError as exc:
            if _error_code(exc) == "ResourceInUseException":
                return False
            raise
        return True

    def delete_table_if_exists(self, table_name: str) -> bool:
        try:
            self._client.delete_table(TableName=table_name)
        except ClientError as exc:
            if _error_code(exc) == "ResourceNotFoundException":
                return False
            raise
        return True

    def wait_until_active(self, table_name: str, timeout: float, poll_interval: float) -> None:
        waiter = self._client.get_waiter("table_exists")
        waiter.wait(TableName=table_name, WaiterConfig=_waiter_config(timeout, poll_interval))

    def wait_until_deleted(self, table_name: str, timeout: float, poll_interval: float) -> None:
        waiter = self._client.get_waiter("table_not_exists")
        waiter.wait(TableName=table_name, WaiterConfig=_waiter_config(timeout, poll_interval))

    def describe_table(self, table_name: str) -> TableDescription:
        response = self._client.describe_table(TableName=table_name)
        return TableDescription.from_response(response["Table"])

    def scan(self, table_name: str, exclusive_start_key: dict[str, Any] | None = None) -> ScanPage:
        kwargs: dict[str, Any] = {"TableName": table_name}
        if exclusive_start_key:
            kwargs["ExclusiveStartKey"] = exclusive_start_key
        response = self._client.scan(**kwargs)
        return ScanPage(
            items=[self._deserialize(item) for item in response.get("Items", [])],
            last_evaluated_key=response.get("LastEvaluatedKey"),
        )

    def _deserialize(self, item: dict[str, Any]) -> dict[str, Any]:
        return {key: self._deserializer.deserialize(value) for key, value in item.items()}
