# mongo_crud/connection.py
from dataclasses import dataclass
from typing import Any, Callable, Optional

from loguru import logger
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import ConfigurationError as PyMongoConfigurationError
from pymongo.errors import InvalidName

from .constants import DEFAULT_CONNECTION_STRING
from .errors import ConfigurationError

ClientFactory = Callable[[str], Any]


@dataclass(frozen=True)
class ConnectionHandle:
    """Client plus selected database. Read-only once built."""

    client: MongoClient
    db: Database

    def close(self) -> None:
        self.client.close()


def open_connection(
    connection_string: Optional[str],
    database: str,
    client_factory: ClientFactory = MongoClient,
) -> ConnectionHandle:
    """Build a client and select `database`.

    pymongo connects lazily, so this never waits on the network; only a
    malformed connection string or database name fails here.
    """
    if not database:
        raise ConfigurationError("open_connection: 'database' is required.")

    default_endpoint = not connection_string
    if default_endpoint:
        connection_string = DEFAULT_CONNECTION_STRING

    try:
        client = client_factory(connection_string)
    except (PyMongoConfigurationError, ValueError) as e:
        raise ConfigurationError(f"Invalid connection string: {e}") from e

    try:
        db = client[database]
    except InvalidName as e:
        raise ConfigurationError(f"Invalid database name {database!r}: {e}") from e

    logger.info(f"Opened MongoDB handle db={database} default_endpoint={default_endpoint}")
    return ConnectionHandle(client=client, db=db)
