"""Composition root for the campus events client core."""
import json
import logging
import os
from dataclasses import dataclass
from typing import Optional

from api.client import DEFAULT_BACKEND_URL, EventsApiClient
from services.event_repository import EventRepository
from services.role_manager import AdminRoleManager
from storage.backends import DynamoDBStorage, FileStorage, MemoryStorage
from storage.credential_store import CredentialStore
from storage.session import Session


_RESERVED_ATTRS = set(
    vars(logging.LogRecord('', logging.INFO, '', 0, '', (), None))
) | {'message', 'asctime'}


# Configure JSON logging
class JsonFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'message': record.getMessage(),
            'logger': record.name
        }

        # Fields passed through ``extra=``
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and key not in log_data:
                log_data[key] = value

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def setup_logging(log_level: str = 'INFO') -> None:
    """
    Configure logging with JSON formatter.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    root_logger = logging.getLogger()

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root_logger.addHandler(handler)

    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))


@dataclass
class AppConfig:
    """Settings read from the environment at startup."""
    backend_url: str = DEFAULT_BACKEND_URL
    log_level: str = 'INFO'
    timeout_seconds: int = 30
    token_store: str = 'file'
    token_store_path: str = '~/.campus_events/credentials.json'
    token_table_name: str = 'campus-events-credentials'


def load_config() -> AppConfig:
    """Read configuration from environment variables."""
    return AppConfig(
        backend_url=os.environ.get('BACKEND_URL', DEFAULT_BACKEND_URL),
        log_level=os.environ.get('LOG_LEVEL', 'INFO'),
        timeout_seconds=int(os.environ.get('TIMEOUT_SECONDS', '30')),
        token_store=os.environ.get('TOKEN_STORE', 'file'),
        token_store_path=os.environ.get(
            'TOKEN_STORE_PATH', '~/.campus_events/credentials.json'
        ),
        token_table_name=os.environ.get(
            'TOKEN_TABLE_NAME', 'campus-events-credentials'
        )
    )


def build_backend(config: AppConfig):
    """
    Create the storage backend selected by TOKEN_STORE.

    Raises:
        ValueError: If the store type is unknown
    """
    store_type = config.token_store.lower()
    if store_type == 'file':
        return FileStorage(config.token_store_path)
    if store_type == 'dynamodb':
        return DynamoDBStorage(config.token_table_name)
    if store_type == 'memory':
        return MemoryStorage()
    raise ValueError(
        f"Unknown TOKEN_STORE '{config.token_store}'. "
        f"Available: dynamodb, file, memory"
    )


@dataclass
class EventsApp:
    """Wired components handed to the presentation layer."""
    config: AppConfig
    session: Session
    client: EventsApiClient
    events: EventRepository
    roles: AdminRoleManager


def create_app(config: Optional[AppConfig] = None) -> EventsApp:
    """
    Build the client core from configuration.

    Args:
        config: Settings to use (default: read from the environment)

    Returns:
        EventsApp with session, API client, repository and role manager
    """
    config = config or load_config()

    setup_logging(config.log_level)
    logger = logging.getLogger(__name__)

    session = Session(CredentialStore(build_backend(config)))
    client = EventsApiClient(
        base_url=config.backend_url,
        timeout=config.timeout_seconds
    )

    logger.info(
        "Events client initialized",
        extra={
            'backend_url': client.base_url,
            'token_store': config.token_store,
            'timeout_seconds': config.timeout_seconds
        }
    )

    return EventsApp(
        config=config,
        session=session,
        client=client,
        events=EventRepository(client, session),
        roles=AdminRoleManager(client, session)
    )
