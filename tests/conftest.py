from __future__ import annotations

import io
from datetime import date

import pytest

from airbooking.database import AirBookingDB, init_db
from airbooking.models import Airline, Flight, Passenger


@pytest.fixture
def db(tmp_path):
    database = AirBookingDB.connect(f"sqlite+pysqlite:///{tmp_path / 'airbooking.db'}", out=io.StringIO())
    init_db(database.engine)
    yield database
    database.cleanup()


@pytest.fixture
def session_factory(db):
    return init_db(db.engine)


@pytest.fixture
def fleet(session_factory):
    """Two airlines, four flights and one passenger (id 1, Ada Lovelace)."""

    with session_factory() as session:
        session.add_all([Airline(id=1, name="Skyward"), Airline(id=2, name="Polar Wings")])
        session.add_all(
            [
                Flight(airline_id=1, flight_number="SK100", origin="LAX", destination="JFK", plane="A320", seats=2, duration=5),
                Flight(airline_id=2, flight_number="PW200", origin="LAX", destination="JFK", plane="B737", seats=150, duration=6),
                Flight(airline_id=1, flight_number="SK300", origin="ORD", destination="JFK", plane="A350", seats=180, duration=2),
                Flight(airline_id=2, flight_number="PW400", origin="JFK", destination="LHR", plane="B787", seats=200, duration=7),
            ]
        )
        session.add(
            Passenger(
                passport_number="X1234567",
                full_name="Ada Lovelace",
                birth_date=date(1990, 12, 10),
                country="United Kingdom",
            )
        )
        session.commit()
    return session_factory
