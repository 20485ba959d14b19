"""Neo4j driver access for the statute graph."""

import os
import logging
from contextlib import contextmanager
from typing import Any, Dict, Generator, List, Optional

from neo4j import GraphDatabase, Driver, Session
from neo4j.exceptions import Neo4jError, ServiceUnavailable, AuthError
from pydantic import BaseModel

logger = logging.getLogger(__name__)


class Neo4jSettings(BaseModel):
    """Where the statute graph lives."""

    uri: str = "bolt://localhost:7687"
    user: str = "neo4j"
    password: str = "lovcite"
    database: str = "neo4j"

    class Config:
        frozen = True

    @classmethod
    def from_env(cls) -> "Neo4jSettings":
        """Read NEO4J_URI, NEO4J_USER, NEO4J_PASSWORD and NEO4J_DATABASE."""
        defaults = cls()
        return cls(
            uri=os.getenv("NEO4J_URI", defaults.uri),
            user=os.getenv("NEO4J_USER", defaults.user),
            password=os.getenv("NEO4J_PASSWORD", defaults.password),
            database=os.getenv("NEO4J_DATABASE", defaults.database),
        )


class Neo4jConnection:
    """Lazily created driver plus per-call sessions.

    Explicit arguments override the environment settings.
    """

    def __init__(
        self,
        uri: Optional[str] = None,
        user: Optional[str] = None,
        password: Optional[str] = None,
        database: Optional[str] = None,
    ):
        overrides = {
            key: value
            for key, value in {"uri": uri, "user": user, "password": password, "database": database}.items()
            if value
        }
        self.settings = Neo4jSettings.from_env().model_copy(update=overrides)
        self._driver: Optional[Driver] = None

    @property
    def uri(self) -> str:
        return self.settings.uri

    @property
    def database(self) -> str:
        return self.settings.database

    def connect(self) -> Driver:
        if self._driver is None:
            self._driver = GraphDatabase.driver(
                self.settings.uri, auth=(self.settings.user, self.settings.password)
            )
            logger.debug(f"Created Neo4j driver for {self.settings.uri}")
        return self._driver

    def close(self) -> None:
        if self._driver is not None:
            self._driver.close()
            self._driver = None

    def __enter__(self) -> "Neo4jConnection":
        self.connect()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @contextmanager
    def session(self, database: Optional[str] = None) -> Generator[Session, None, None]:
        """Yield a session on the configured database (or the one given)."""
        session = self.connect().session(database=database or self.settings.database)
        try:
            yield session
        finally:
            session.close()

    def query(self, cypher: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """Run one statement and return its records as dicts."""
        with self.session() as session:
            return session.run(cypher, params or {}).data()

    def verify_connection(self) -> bool:
        """Return True if the server accepts our credentials and answers."""
        try:
            self.connect().verify_connectivity()
        except (ServiceUnavailable, AuthError, Neo4jError, OSError) as e:
            logger.warning(f"Neo4j at {self.settings.uri} is not reachable: {e}")
            return False
        return True


_connection: Optional[Neo4jConnection] = None


def get_connection() -> Neo4jConnection:
    """Shared connection configured from the environment."""
    global _connection
    if _connection is None:
        _connection = Neo4jConnection()
    return _connection
