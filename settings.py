r"""----------------------------------------------------------------------
	MySQL connection settings for the client / meeting demo

	Every value is read from the environment (a local `.env` file is
	loaded first via python-dotenv), falling back to the defaults of a
	developer MySQL instance:

		MYSQL_HOST      localhost
		MYSQL_PORT      3306
		MYSQL_USER      root
		MYSQL_PASSWORD  password
		MYSQL_SSL       false     (1 / true / yes / on to enable TLS)
		MYSQL_SSL_CA    -         (CA bundle; TLS is unverified without it)
		MYSQL_DATABASE  clientDB
		SQL_ECHO        false     (SQLAlchemy statement echo)

	🔑 The engine URL carries no database: the demo issues
	   CREATE DATABASE / USE itself.
----------------------------------------------------------------------"""

import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine

_TRUTHY = {"1", "true", "yes", "on"}


def _as_bool(value: Optional[str], default: bool = False) -> bool:
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in _TRUTHY


def _as_int(name: str, value: Optional[str], default: int) -> int:
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


@dataclass(frozen=True)
class DatabaseSettings:
    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = "password"
    ssl: bool = False
    ssl_ca: Optional[str] = None
    database: str = "clientDB"
    echo: bool = False

    def url(self) -> URL:
        """Server URL for PyMySQL, no database selected."""
        return URL.create(
            "mysql+pymysql",
            username=self.user,
            password=self.password,
            host=self.host,
            port=self.port,
        )

    def connect_args(self) -> Dict[str, Any]:
        if not self.ssl:
            return {}
        if self.ssl_ca:
            return {"ssl": {"ca": self.ssl_ca}}
        # encrypted but unverified
        return {"ssl": {"check_hostname": False}}


def load_settings(environ: Optional[Mapping[str, str]] = None) -> DatabaseSettings:
    """Build settings from *environ* (defaults to ``os.environ`` after .env)."""
    if environ is None:
        load_dotenv()
        environ = os.environ

    return DatabaseSettings(
        host=environ.get("MYSQL_HOST") or "localhost",
        port=_as_int("MYSQL_PORT", environ.get("MYSQL_PORT"), 3306),
        user=environ.get("MYSQL_USER") or "root",
        password=environ.get("MYSQL_PASSWORD", "password"),
        ssl=_as_bool(environ.get("MYSQL_SSL")),
        ssl_ca=environ.get("MYSQL_SSL_CA") or None,
        database=environ.get("MYSQL_DATABASE") or "clientDB",
        echo=_as_bool(environ.get("SQL_ECHO")),
    )


def create_demo_engine(settings: DatabaseSettings) -> Engine:
    # AUTOCOMMIT: each step is applied as soon as it runs; nothing is
    # rolled back when a later step fails.
    return create_engine(
        settings.url(),
        connect_args=settings.connect_args(),
        isolation_level="AUTOCOMMIT",
        echo=settings.echo,
    )
