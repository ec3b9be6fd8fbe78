from __future__ import annotations

from datetime import date

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from airbooking import queries
from airbooking.database import render_table
from airbooking.models import Booking, Passenger


def test_insert_returns_database_assigned_id(db, fleet):
    new_id = db.execute_update(
        queries.insert_passenger(
            passport_number="Z9",
            full_name="Grace Hopper",
            birth_date=date(1906, 12, 9),
            country="United States",
        )
    )
    assert new_id == 2
    with fleet() as session:
        assert session.get(Passenger, 2).full_name == "Grace Hopper"


def test_booking_insert_returns_stored_reference(db, fleet):
    reference = db.execute_update(
        queries.insert_booking(departure=date(2018, 1, 1), flight_number="SK100", passenger_id=1)
    )
    assert isinstance(reference, str)
    assert len(reference) == 10
    with fleet() as session:
        assert session.scalars(select(Booking.reference)).one() == reference


def test_update_returns_affected_rows(db, fleet):
    assert db.execute_update(queries.update_flight("SK300", {"plane": "A321"})) == 1
    assert db.execute_update(queries.update_flight("NOPE", {"plane": "A321"})) == 0


def test_print_result_writes_header_and_tab_separated_rows(db, fleet):
    count = db.execute_query_and_print_result(queries.route_listing("LAX", "JFK"))

    assert count == 2
    assert db.out.getvalue().splitlines() == [
        "flightnum\torigin\tdestination\tplane\tduration",
        "PW200\tLAX\tJFK\tB737\t6",
        "SK100\tLAX\tJFK\tA320\t5",
    ]


def test_print_result_uses_tabulate_for_other_formats(db, fleet):
    db.table_format = "github"
    db.execute_query_and_print_result(queries.route_listing("LAX", "JFK"))
    lines = db.out.getvalue().splitlines()

    assert lines[0].startswith("| flightnum")
    assert "| PW200" in lines[2]


def test_render_table_writes_null_for_missing_values():
    assert render_table([["SK100", None]], ["flightnum", "comment"]) == "flightnum\tcomment\nSK100\tnull"


def test_print_result_is_silent_for_empty_results(db, fleet):
    assert db.execute_query_and_print_result(queries.route_listing("LHR", "PEK")) == 0
    assert db.out.getvalue() == ""


def test_return_result_strips_char_padding(db, fleet):
    db.execute_update(queries.update_flight("PW400", {"origin": "JFK     "}))
    rows = db.execute_query_and_return_result(queries.flight_by_number("PW400"))
    assert rows == [["2", "PW400", "JFK", "LHR", "B787", "200", "7"]]


def test_execute_query_reports_presence(db, fleet):
    assert db.execute_query(queries.flights_from("LAX")) == 1
    assert db.execute_query(queries.flights_from("PEK")) == 0


def test_integrity_errors_propagate(db, fleet):
    with pytest.raises(IntegrityError):
        db.execute_update(
            queries.insert_passenger(
                passport_number="X1234567",
                full_name="Ada Clone",
                birth_date=date(1990, 1, 1),
                country="Nowhere",
            )
        )
    # The connection stays usable after a failed statement.
    assert db.execute_query(select(Passenger.id)) == 1


def test_cleanup_is_idempotent(db):
    db.cleanup()
    db.cleanup()
    with pytest.raises(RuntimeError):
        db.execute_query(queries.all_airlines())
