"""Connection settings for the mapper.

`MongoSettings` reads `MONGO_URI` / `MONGO_DB_NAME` from the environment when
created without arguments. `MongoSettings.from_secrets` builds the same object
from a secrets mapping such as Streamlit's `st.secrets["MongoDB"]`.
"""

import os
from typing import Any, Mapping
from urllib.parse import quote_plus

from pydantic import BaseModel, Field

from .constants import DEFAULT_CONNECTION_STRING, ENV_MONGO_DB_NAME, ENV_MONGO_URI
from .errors import ConfigurationError


class MongoSettings(BaseModel):
    """Connection string and database name for one mapper."""

    uri: str = Field(
        default_factory=lambda: os.getenv(ENV_MONGO_URI, DEFAULT_CONNECTION_STRING)
    )
    db_name: str = Field(default_factory=lambda: os.getenv(ENV_MONGO_DB_NAME, ""))

    @classmethod
    def from_secrets(cls, secrets: Mapping[str, Any]) -> "MongoSettings":
        """Build settings from a secrets mapping.

        Two layouts are supported:
          1) {"uri": "...", "database_name": "..."}
          2) {"mongo_username", "mongo_password", "mongo_cluster_url", "database_name"}
             which is assembled into a `mongodb+srv://` URI.

        Raises:
            ConfigurationError: if neither layout is complete.
        """
        try:
            db_name = secrets["database_name"]
        except KeyError as e:
            raise ConfigurationError("secrets: 'database_name' is required.") from e

        if secrets.get("uri"):
            return cls(uri=secrets["uri"], db_name=db_name)

        required = ["mongo_username", "mongo_password", "mongo_cluster_url"]
        missing = [k for k in required if k not in secrets]
        if missing:
            raise ConfigurationError(f"secrets: missing fields: {', '.join(missing)}")

        username = quote_plus(str(secrets["mongo_username"]))
        password = quote_plus(str(secrets["mongo_password"]))
        cluster_url = secrets["mongo_cluster_url"]

        uri = f"mongodb+srv://{username}:{password}@{cluster_url}/?retryWrites=true&w=majority"
        return cls(uri=uri, db_name=db_name)
