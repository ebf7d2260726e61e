"""
DynamoDB service for the DailyTracker application.

This service adapts the KeyValueStore contract onto a DynamoDB table so that
day records and other keys can be persisted outside the process. Each store
entry is one item with a string hash key "key" and a string attribute "value".

Classes:
    DynamoDBKeyValueStore: KeyValueStore backed by a DynamoDB table
"""

import asyncio
import logging
import os
from typing import Any, Dict, Optional, Set

import boto3
from botocore.exceptions import BotoCoreError, ClientError, NoCredentialsError

from ..exceptions import RecordCorruptError, StoreUnavailableError
from .kv_store import KeyValueStore

logger = logging.getLogger(__name__)

KEY_ATTRIBUTE = "key"
VALUE_ATTRIBUTE = "value"


class DynamoDBKeyValueStore(KeyValueStore):
    """
    Key-value store persisted in DynamoDB.

    Blocking table calls run in worker threads. Any boto3 or botocore failure
    is reported as StoreUnavailableError; an item whose "value" attribute is
    missing or not a string raises RecordCorruptError.

    Attributes:
        table_name: Name of the DynamoDB table
        dynamodb: Boto3 DynamoDB resource
        table: DynamoDB table resource

    Example:
        >>> store = DynamoDBKeyValueStore(table_name="daily-tracker")
        >>> await store.set_item("2024-06-01", '{"reading": true}')
        >>> await store.get_item("2024-06-01")
        '{"reading": true}'
    """

    def __init__(self, table_name: Optional[str] = None):
        """
        Initialize the DynamoDB store.

        Args:
            table_name: Optional table name override, uses env var if not provided

        Raises:
            ValueError: If table name is not provided and not in environment,
                or the table does not exist
            NoCredentialsError: If AWS credentials are not configured
            StoreUnavailableError: If the table cannot be reached
        """
        self.table_name = table_name or os.getenv("ACTIVITIES_TABLE")

        if not self.table_name:
            raise ValueError(
                "Table name must be provided either as parameter or ACTIVITIES_TABLE environment variable"
            )

        try:
            self.dynamodb = boto3.resource("dynamodb")
            self.table = self.dynamodb.Table(self.table_name)

            # Verify table exists by getting its description
            self.table.load()

        except NoCredentialsError:
            raise
        except ClientError as e:
            if e.response["Error"]["Code"] == "ResourceNotFoundException":
                raise ValueError(f"DynamoDB table '{self.table_name}' not found")
            raise StoreUnavailableError(
                f"DynamoDB table '{self.table_name}' could not be loaded: {e}",
                operation="load_table",
            ) from e
        except BotoCoreError as e:
            raise StoreUnavailableError(
                f"DynamoDB table '{self.table_name}' could not be loaded: {e}",
                operation="load_table",
            ) from e

    async def get_all_keys(self) -> Set[str]:
        return await self._call("get_all_keys", None, self._scan_keys)

    async def get_item(self, key: str) -> Optional[str]:
        return await self._call("get_item", key, self._get_value, key)

    async def set_item(self, key: str, value: str) -> None:
        await self._call("set_item", key, self._put_value, key, value)

    def _scan_keys(self) -> Set[str]:
        # "key" is a DynamoDB reserved word
        scan_kwargs = {
            "ProjectionExpression": "#k",
            "ExpressionAttributeNames": {"#k": KEY_ATTRIBUTE},
        }

        keys = set()
        while True:
            response = self.table.scan(**scan_kwargs)
            for item in response.get("Items", []):
                keys.add(item[KEY_ATTRIBUTE])

            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                return keys
            scan_kwargs["ExclusiveStartKey"] = last_key

    def _get_value(self, key: str) -> Optional[str]:
        response = self.table.get_item(Key={KEY_ATTRIBUTE: key}, ConsistentRead=True)

        if "Item" not in response:
            return None

        value = response["Item"].get(VALUE_ATTRIBUTE)
        if not isinstance(value, str):
            raise RecordCorruptError(
                key, repr(value), f"'{VALUE_ATTRIBUTE}' attribute missing or not a string"
            )
        return value

    def _put_value(self, key: str, value: str) -> None:
        self.table.put_item(Item={KEY_ATTRIBUTE: key, VALUE_ATTRIBUTE: value})

    async def _call(self, operation: str, key: Optional[str], func, *args):
        try:
            return await asyncio.to_thread(func, *args)
        except (ClientError, BotoCoreError) as e:
            logger.error(
                "DynamoDB %s failed on table %s (key=%s): %s",
                operation,
                self.table_name,
                key,
                e,
            )
            raise StoreUnavailableError(
                f"DynamoDB {operation} failed: {e}", operation=operation, key=key
            ) from e

    def health_check(self) -> Dict[str, Any]:
        """
        Perform a health check on the DynamoDB table.

        Returns:
            Dictionary with health check results
        """
        try:
            table_description = self.table.meta.client.describe_table(TableName=self.table_name)

            return {
                "status": "healthy",
                "backend": "dynamodb",
                "table_name": self.table_name,
                "table_status": table_description["Table"]["TableStatus"],
                "item_count": table_description["Table"].get("ItemCount", "unknown"),
                "region": self.table.meta.client.meta.region_name,
            }

        except (ClientError, BotoCoreError) as e:
            return {
                "status": "unhealthy",
                "backend": "dynamodb",
                "error": str(e),
                "table_name": self.table_name,
            }
