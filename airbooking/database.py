"""Database helpers for the airline booking client."""
from __future__ import annotations

import logging
import sys
from typing import Dict, List, Optional, Sequence, TextIO

from sqlalchemy import create_engine
from sqlalchemy.engine import Connection, CursorResult, Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool
from sqlalchemy.sql.expression import Executable
from tabulate import tabulate

from .models import Base

logger = logging.getLogger(__name__)

DEFAULT_URL = "postgresql+psycopg2://localhost:5432/airbooking"


def create_db_engine(
    db_url: str = DEFAULT_URL,
    *,
    echo: bool = False,
    connect_args: Dict[str, object] | None = None,
) -> Engine:
    if db_url.startswith("sqlite"):
        final_connect_args = {"check_same_thread": False}
        if connect_args:
            final_connect_args.update(connect_args)
    else:
        final_connect_args = connect_args or {}

    if db_url.endswith(":memory:"):
        return create_engine(
            db_url,
            echo=echo,
            connect_args=final_connect_args,
            poolclass=StaticPool,
        )
    return create_engine(db_url, echo=echo, connect_args=final_connect_args)


def init_db(engine: Engine) -> sessionmaker[Session]:
    """Create any missing tables and return a session factory bound to ``engine``."""

    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, expire_on_commit=False)


def render_table(
    rows: Sequence[Sequence[Optional[str]]], headers: Sequence[str], table_format: str = "tsv"
) -> str:
    """Render ``rows`` under ``headers``; ``tsv`` keeps each value exactly as stored."""

    if table_format == "tsv":
        lines = ["\t".join(headers)]
        lines.extend("\t".join("null" if value is None else str(value) for value in row) for row in rows)
        return "\n".join(lines)
    return tabulate(
        rows,
        headers=list(headers),
        tablefmt=table_format,
        missingval="null",
        disable_numparse=True,
    )


def _clean(value: object) -> Optional[str]:
    if value is None:
        return None
    # CHAR(n) columns come back padded on PostgreSQL.
    return str(value).rstrip()


class AirBookingDB:
    """Single autocommit connection used for the lifetime of the client.

    Statements are SQLAlchemy executables built by :mod:`airbooking.queries`;
    values always travel as bound parameters.
    """

    def __init__(
        self,
        engine: Engine,
        *,
        out: TextIO | None = None,
        table_format: str = "tsv",
    ) -> None:
        self.engine = engine
        self.out = out if out is not None else sys.stdout
        self.table_format = table_format
        self._connection: Connection | None = engine.connect().execution_options(
            isolation_level="AUTOCOMMIT"
        )

    @classmethod
    def connect(cls, db_url: str, *, echo: bool = False, **kwargs) -> "AirBookingDB":
        return cls(create_db_engine(db_url, echo=echo), **kwargs)

    @property
    def connection(self) -> Connection:
        if self._connection is None:
            raise RuntimeError("database connection is closed")
        return self._connection

    def _execute(self, statement: Executable) -> CursorResult:
        logger.debug("executing %s", statement)
        return self.connection.execute(statement)

    def execute_update(self, statement: Executable) -> object:
        """Run an INSERT, UPDATE or DDL statement.

        Returns the first value of a RETURNING clause when the statement has
        one, the new primary key for a single-row insert, otherwise the
        number of affected rows.
        """

        result = self._execute(statement)
        if result.returns_rows:
            return result.scalar_one()
        if result.context.isinsert and result.inserted_primary_key is not None:
            key = tuple(result.inserted_primary_key)
            return key[0] if len(key) == 1 else key
        return result.rowcount

    def execute_query_and_print_result(self, statement: Executable) -> int:
        """Print the rows of a query as a table with a header and return the row count."""

        result = self._execute(statement)
        headers = list(result.keys())
        rows = [[_clean(value) for value in row] for row in result]
        if rows:
            print(render_table(rows, headers, self.table_format), file=self.out)
        return len(rows)

    def execute_query_and_return_result(self, statement: Executable) -> List[List[Optional[str]]]:
        result = self._execute(statement)
        return [[_clean(value) for value in row] for row in result]

    def execute_query(self, statement: Executable) -> int:
        """Return 1 if ``statement`` yields at least one row, 0 otherwise."""

        result = self._execute(statement)
        return 1 if result.first() is not None else 0

    def cleanup(self) -> None:
        if self._connection is not None:
            self._connection.close()
            self._connection = None
        self.engine.dispose()
