"""Key-value storage backends for locally persisted client state."""
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Union

import boto3
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when the underlying storage medium is unavailable."""


class MemoryStorage:
    """In-process storage; contents are lost when the process exits."""

    def __init__(self):
        self._items: Dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class FileStorage:
    """Storage backed by a single JSON object file."""

    def __init__(self, path: Union[str, Path]):
        """
        Initialize file storage.

        Args:
            path: Location of the JSON file (created on first write)
        """
        self.path = Path(path).expanduser()

    def get_item(self, key: str) -> Optional[str]:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        items = self._read()
        items[key] = value
        self._write(items)

    def remove_item(self, key: str) -> None:
        items = self._read()
        if key not in items:
            return
        del items[key]
        self._write(items)

    def _read(self) -> dict:
        try:
            text = self.path.read_text(encoding='utf-8')
        except FileNotFoundError:
            # First run: nothing stored yet
            return {}
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Cannot read {self.path}: {e}") from e

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning(f"Ignoring corrupted storage file {self.path}: {e}")
            return {}

        return data if isinstance(data, dict) else {}

    def _write(self, items: dict) -> None:
        """Replace the file atomically so a partial write never clobbers it."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f'.{self.path.name}.', suffix='.tmp'
            )
        except OSError as e:
            raise StorageError(f"Cannot write {self.path}: {e}") from e

        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(json.dumps(items, indent=2, ensure_ascii=False))
            os.replace(tmp_name, self.path)
        except OSError as e:
            Path(tmp_name).unlink(missing_ok=True)
            raise StorageError(f"Cannot write {self.path}: {e}") from e


class DynamoDBStorage:
    """Storage backed by a DynamoDB table with one item per key."""

    KEY_ATTRIBUTE = 'storage_key'
    VALUE_ATTRIBUTE = 'value'

    def __init__(self, table_name: str):
        """
        Initialize DynamoDB client and table reference.

        Args:
            table_name: Name of the DynamoDB table (hash key: storage_key)
        """
        self.table_name = table_name
        self.dynamodb = boto3.resource('dynamodb')
        self.table = self.dynamodb.Table(table_name)
        logger.info(f"Initialized DynamoDBStorage for table: {table_name}")

    def get_item(self, key: str) -> Optional[str]:
        try:
            response = self.table.get_item(Key={self.KEY_ATTRIBUTE: key})
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Error reading '{key}' from {self.table_name}: {e}") from e

        item = response.get('Item')
        if not item:
            return None
        value = item.get(self.VALUE_ATTRIBUTE)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        try:
            self.table.put_item(
                Item={self.KEY_ATTRIBUTE: key, self.VALUE_ATTRIBUTE: value}
            )
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Error writing '{key}' to {self.table_name}: {e}") from e

    def remove_item(self, key: str) -> None:
        # DeleteItem on a missing key is not an error in DynamoDB
        try:
            self.table.delete_item(Key={self.KEY_ATTRIBUTE: key})
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Error deleting '{key}' from {self.table_name}: {e}") from e
