"""Connection settings for the booking client."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from sqlalchemy.engine import URL, make_url

_TRUE_VALUES = ("1", "true", "yes", "on")


def _env_flag(environ: Mapping[str, str], name: str) -> bool:
    return environ.get(name, "").strip().lower() in _TRUE_VALUES


@dataclass
class Settings:
    dbname: str
    port: int
    user: str
    host: str = "localhost"
    password: str = ""
    driver: str = "postgresql+psycopg2"
    url_override: Optional[str] = None
    echo: bool = False
    table_format: str = "tsv"

    @classmethod
    def from_env(
        cls,
        dbname: str,
        port: int,
        user: str,
        environ: Optional[Mapping[str, str]] = None,
        **overrides: object,
    ) -> "Settings":
        """Build settings from ``environ`` (default ``os.environ``); non-None overrides win."""

        env = os.environ if environ is None else environ
        values = {
            "host": env.get("AIRBOOKING_DB_HOST", "localhost"),
            "password": env.get("AIRBOOKING_DB_PASSWORD", ""),
            "driver": env.get("AIRBOOKING_DB_DRIVER", "postgresql+psycopg2"),
            "url_override": env.get("AIRBOOKING_DATABASE_URL") or None,
            "echo": _env_flag(env, "AIRBOOKING_ECHO_SQL"),
            "table_format": env.get("AIRBOOKING_TABLE_FORMAT", "tsv"),
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(dbname=dbname, port=port, user=user, **values)

    @property
    def database_url(self) -> URL:
        if self.url_override:
            return make_url(self.url_override)
        return URL.create(
            self.driver,
            username=self.user,
            password=self.password or None,
            host=self.host,
            port=self.port,
            database=self.dbname,
        )

    def display_url(self) -> str:
        return self.database_url.render_as_string(hide_password=True)
