"""Command line entry point for the airline booking client."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable, Optional

from sqlalchemy.exc import SQLAlchemyError

from . import menu
from .config import Settings
from .database import AirBookingDB, init_db
from .dataset import generate_sample_data
from .prompts import Prompter

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def parse_args(argv: Iterable[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage passengers, flights, bookings and ratings.")
    parser.add_argument("dbname", help="Name of the database to connect to.")
    parser.add_argument("port", type=int, help="Port the database server listens on.")
    parser.add_argument("user", help="Database user name.")
    parser.add_argument("--host", default=None, help="Database host (default: localhost).")
    parser.add_argument("--password", default=None, help="Database password (default: none).")
    parser.add_argument(
        "--driver",
        default=None,
        help="SQLAlchemy driver name (default: postgresql+psycopg2).",
    )
    parser.add_argument(
        "--url",
        dest="url_override",
        default=None,
        help="Full SQLAlchemy database URL; overrides dbname, port, user and host.",
    )
    parser.add_argument("--echo", action="store_true", default=None, help="Echo every SQL statement.")
    parser.add_argument(
        "--table-format",
        default=None,
        help="tabulate format used for query results (default: tsv).",
    )
    parser.add_argument(
        "--create-schema",
        action="store_true",
        help="Create any missing tables before starting.",
    )
    parser.add_argument(
        "--seed",
        action="store_true",
        help="Load deterministic sample data (implies --create-schema).",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser.parse_args(list(argv))


def main(argv: Iterable[str] | None = None, *, prompter: Optional[Prompter] = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    setup_logging(args.verbose)
    settings = Settings.from_env(
        args.dbname,
        args.port,
        args.user,
        host=args.host,
        password=args.password,
        driver=args.driver,
        url_override=args.url_override,
        echo=args.echo,
        table_format=args.table_format,
    )
    prompter = prompter or Prompter()
    out = prompter.stdout

    print("Connecting to database...", file=out)
    print(f"Connection URL: {settings.display_url()}\n", file=out)
    try:
        db = AirBookingDB.connect(
            settings.database_url.render_as_string(hide_password=False),
            echo=settings.echo,
            out=out,
            table_format=settings.table_format,
        )
    except SQLAlchemyError as exc:
        print(f"Error - Unable to Connect to Database: {exc}", file=sys.stderr)
        print("Make sure the database server is running on this machine", file=out)
        return 1
    print("Done", file=out)

    try:
        if args.create_schema or args.seed:
            session_factory = init_db(db.engine)
            if args.seed:
                summary = generate_sample_data(session_factory)
                logger.info("loaded sample data: %s", summary)
        menu.main_loop(db, prompter)
    except KeyboardInterrupt:
        print(file=out)
    except SQLAlchemyError as exc:
        logger.error("%s", exc)
        return 1
    finally:
        print("Disconnecting from database...", end="", file=out)
        db.cleanup()
        print("Done\n\nBye !", file=out)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
