from __future__ import annotations

from datetime import date

import pytest
from sqlalchemy.dialects import postgresql

from airbooking import queries


def compile_pg(statement):
    compiled = statement.compile(dialect=postgresql.dialect())
    return " ".join(str(compiled).split()), compiled.params


def test_user_input_is_bound_not_inlined():
    hostile = "x' OR '1'='1"
    sql, params = compile_pg(queries.route_listing(hostile, "JFK"))

    assert hostile not in sql
    assert hostile in params.values()
    assert "FROM flight WHERE flight.destination = " in sql
    assert "AND flight.origin = " in sql
    assert params == {"destination_1": "JFK", "origin_1": hostile}


def test_passenger_lookup_adds_passport_filter_only_when_given():
    sql, params = compile_pg(queries.passenger_by_name("Ada Lovelace"))
    assert "passnum" not in sql
    assert list(params.values()) == ["Ada Lovelace"]

    sql, params = compile_pg(queries.passenger_by_name("Ada Lovelace", "X1"))
    assert "passenger.passnum = " in sql
    assert sorted(params.values()) == ["Ada Lovelace", "X1"]


def test_insert_passenger_targets_lowercase_columns():
    sql, params = compile_pg(
        queries.insert_passenger(
            passport_number="X1",
            full_name="Ada Lovelace",
            birth_date=date(1990, 12, 10),
            country="UK",
        )
    )
    assert sql.startswith("INSERT INTO passenger (")
    for column in ("passnum", "fullname", "bdate", "country"):
        assert column in sql
    assert "pid" not in sql.split("VALUES")[0]
    assert date(1990, 12, 10) in params.values()


def test_insert_booking_returns_reference():
    sql, params = compile_pg(
        queries.insert_booking(departure=date(2018, 5, 20), flight_number="SK100", passenger_id=1)
    )
    assert sql.startswith("INSERT INTO booking (")
    assert sql.endswith("RETURNING booking.bookref")
    assert {"SK100", 1} <= set(params.values())


def test_popular_destinations_counts_and_limits():
    sql, params = compile_pg(queries.popular_destinations(3))
    assert "count(flight.flightnum) AS flights" in sql
    assert "GROUP BY flight.destination" in sql
    assert "ORDER BY flights DESC, flight.destination" in sql
    assert "LIMIT" in sql
    assert 3 in params.values()


def test_highest_rated_routes_groups_per_flight():
    sql, _ = compile_pg(queries.highest_rated_routes(5))
    assert "avg(ratings.score) AS average_score" in sql
    assert "FROM ratings JOIN flight ON ratings.flightnum = flight.flightnum" in sql
    assert "JOIN airline ON flight.airid = airline.airid" in sql
    assert "GROUP BY airline.name, flight.flightnum" in sql
    assert "ORDER BY average_score DESC" in sql


def test_flights_by_duration_orders_ascending():
    sql, params = compile_pg(queries.flights_by_duration("LAX", "JFK", 2))
    assert "ORDER BY flight.duration ASC" in sql
    assert {"LAX", "JFK", 2} <= set(params.values())


def test_update_flight_only_accepts_known_fields():
    sql, params = compile_pg(queries.update_flight("SK100", {"seats": 90, "origin": "SFO"}))
    assert sql.startswith("UPDATE flight SET")
    assert "WHERE flight.flightnum = " in sql
    assert {90, "SFO", "SK100"} <= set(params.values())

    with pytest.raises(ValueError):
        queries.update_flight("SK100", {"flight_number": "SK999"})
    with pytest.raises(ValueError):
        queries.update_flight("SK100", {})


def test_booking_count_filters_on_flight_and_departure():
    sql, params = compile_pg(queries.booking_count("SK100", date(2018, 5, 20)))
    assert sql.startswith("SELECT count(*) AS count_1 FROM booking")
    assert "booking.flightnum = " in sql
    assert "booking.departure = " in sql
    assert date(2018, 5, 20) in params.values()
