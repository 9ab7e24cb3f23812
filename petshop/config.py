"""Database connection settings."""

import logging
import os
from typing import Mapping, Optional

from pymongo import MongoClient

DATABASE_NAME = "petshop"
CONNECT_TIMEOUT_SECONDS = 10
URI_VARIABLE = "MONGOSTRING"

_SCHEMES = ("mongodb://", "mongodb+srv://")

logger = logging.getLogger(__name__)


def mongo_uri(environ: Optional[Mapping[str, str]] = None) -> str:
    """Connection string from the environment, empty when unset."""
    env = os.environ if environ is None else environ
    return env.get(URI_VARIABLE, "")


def connect_db(uri: Optional[str] = None) -> MongoClient:
    """Create a client for ``uri`` (or the environment's connection string)."""
    if uri is None:
        uri = mongo_uri()
    if not uri.startswith(_SCHEMES):
        raise ValueError("connection string scheme must be mongodb or mongodb+srv")
    timeout_ms = CONNECT_TIMEOUT_SECONDS * 1000
    client: MongoClient = MongoClient(
        uri,
        connectTimeoutMS=timeout_ms,
        serverSelectionTimeoutMS=timeout_ms,
    )
    logger.info("Connected to MongoDB")
    return client


def get_database(client):
    """The pet shop database of ``client``."""
    return client[DATABASE_NAME]