from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pymongo import MongoClient
from pymongo.database import Database


@dataclass
class MongoConfig:
    uri: str
    database: str


class DatabaseConnection:
    """Singleton-like MongoDB connection.

    Note: MongoClient keeps its own connection pool, so one client is shared by
    every repository. The client is created lazily on first use.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: MongoConfig, client: Optional[MongoClient] = None):
        self._config = config
        self._client = client

    @classmethod
    def get_instance(cls, config: MongoConfig) -> "DatabaseConnection":
        if cls._instance is None:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    @property
    def client(self) -> MongoClient:
        if self._client is None:
            self._client = MongoClient(self._config.uri)
        return self._client

    @property
    def db(self) -> Database:
        return self.client[self._config.database]

    def collection(self, name: str):
        return self.db[name]

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
