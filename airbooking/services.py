"""Data-access operations behind each menu action."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Sequence, Tuple

from . import queries, validation
from .database import AirBookingDB

logger = logging.getLogger(__name__)


class AirBookingError(RuntimeError):
    """Base class for failures a menu action reports back to the user."""


class PassengerNotFoundError(AirBookingError):
    pass


class AirlineNotFoundError(AirBookingError):
    pass


class FlightNotFoundError(AirBookingError):
    pass


class BookingNotFoundError(AirBookingError):
    pass


class FlightFullError(AirBookingError):
    """Raised when every seat of a flight is taken on the requested date."""


class DuplicateBookingError(AirBookingError):
    pass


class DuplicateRatingError(AirBookingError):
    pass


class DuplicatePassengerError(AirBookingError):
    pass


class DuplicateFlightError(AirBookingError):
    pass


@dataclass
class FlightInfo:
    airline_id: int
    flight_number: str
    origin: str
    destination: str
    plane: str
    seats: int
    duration: int

    @classmethod
    def from_row(cls, row: Sequence[Optional[str]]) -> "FlightInfo":
        airline_id, flight_number, origin, destination, plane, seats, duration = row
        return cls(
            airline_id=int(airline_id),
            flight_number=flight_number,
            origin=origin,
            destination=destination,
            plane=plane,
            seats=int(seats),
            duration=int(duration),
        )

    def describe(self) -> str:
        return (
            f"Flight Number: {self.flight_number} Plane: {self.plane} "
            f"Seats: {self.seats} Duration: {self.duration}"
        )


@dataclass
class SeatAvailability:
    flight: FlightInfo
    departure: date
    booked: int

    @property
    def available(self) -> int:
        return max(self.flight.seats - self.booked, 0)

    def describe(self) -> str:
        return (
            f"For FlightNum: {self.flight.flight_number} on {self.departure.isoformat()}, "
            f"the origin is: {self.flight.origin}, the destination is: {self.flight.destination}, "
            f"the number of booked seats is: {self.booked}, "
            f"the number of total seats is: {self.flight.seats}, "
            f"and the number of seats available is: {self.available}"
        )


def _require_positive(value: int, field: str) -> int:
    if value < 1:
        raise ValueError(f"{field} must be a positive number")
    return value


# Passengers

def add_passenger(
    db: AirBookingDB,
    *,
    first_name: str,
    last_name: str,
    birth_date: date,
    passport_number: str,
    country: str,
) -> int:
    """Insert a passenger and return the id the database assigned."""

    if db.execute_query(queries.passenger_by_passport(passport_number)):
        raise DuplicatePassengerError(f"a passenger with passport number {passport_number} already exists")
    full_name = f"{first_name} {last_name}"
    passenger_id = db.execute_update(
        queries.insert_passenger(
            passport_number=passport_number,
            full_name=full_name,
            birth_date=birth_date,
            country=country,
        )
    )
    logger.info("added passenger %s (%s)", passenger_id, full_name)
    return int(passenger_id)


def find_passenger(db: AirBookingDB, full_name: str, passport_number: Optional[str] = None) -> int:
    """Return the id of the first passenger matching the name (and passport, if given)."""

    rows = db.execute_query_and_return_result(queries.passenger_by_name(full_name, passport_number))
    if not rows:
        raise PassengerNotFoundError(f"no passenger named {full_name!r}")
    return int(rows[0][0])


# Airlines and flights

def print_airlines(db: AirBookingDB) -> int:
    return db.execute_query_and_print_result(queries.all_airlines())


def airline_exists(db: AirBookingDB, airline_id: int) -> bool:
    return bool(db.execute_query(queries.airline_by_id(airline_id)))


def get_flight(db: AirBookingDB, flight_number: str) -> FlightInfo:
    rows = db.execute_query_and_return_result(queries.flight_by_number(flight_number))
    if not rows:
        raise FlightNotFoundError(f"no flight numbered {flight_number!r}")
    return FlightInfo.from_row(rows[0])


def print_flight(db: AirBookingDB, flight_number: str) -> int:
    return db.execute_query_and_print_result(queries.flight_by_number(flight_number))


def find_flights(db: AirBookingDB, origin: str, destination: str) -> List[FlightInfo]:
    rows = db.execute_query_and_return_result(queries.flights_between(origin, destination))
    return [FlightInfo.from_row(row) for row in rows]


def add_flight(
    db: AirBookingDB,
    *,
    airline_id: int,
    flight_number: str,
    origin: str,
    destination: str,
    plane: str,
    seats: int,
    duration: int,
) -> str:
    if not airline_exists(db, airline_id):
        raise AirlineNotFoundError(f"no airline with id {airline_id}")
    if db.execute_query(queries.flight_by_number(flight_number)):
        raise DuplicateFlightError(f"flight {flight_number} already exists")
    db.execute_update(
        queries.insert_flight(
            airline_id=airline_id,
            flight_number=flight_number,
            origin=origin,
            destination=destination,
            plane=plane,
            seats=_require_positive(seats, "seats"),
            duration=_require_positive(duration, "duration"),
        )
    )
    logger.info("added flight %s %s-%s", flight_number, origin, destination)
    return flight_number


def update_flight(db: AirBookingDB, flight_number: str, changes: Dict[str, object]) -> int:
    """Apply ``changes`` to a flight in one UPDATE; returns the affected row count."""

    get_flight(db, flight_number)
    for field in ("seats", "duration"):
        if field in changes:
            _require_positive(int(changes[field]), field)
    if not changes:
        return 0
    updated = db.execute_update(queries.update_flight(flight_number, changes))
    logger.info("updated flight %s: %s", flight_number, ", ".join(sorted(changes)))
    return int(updated)


def print_route(db: AirBookingDB, origin: str, destination: str) -> int:
    return db.execute_query_and_print_result(queries.route_listing(origin, destination))


def origin_served(db: AirBookingDB, origin: str) -> bool:
    return bool(db.execute_query(queries.flights_from(origin)))


def destination_served(db: AirBookingDB, destination: str) -> bool:
    return bool(db.execute_query(queries.flights_to(destination)))


def most_popular_destinations(db: AirBookingDB, limit: int) -> List[Tuple[str, int]]:
    rows = db.execute_query_and_return_result(queries.popular_destinations(_require_positive(limit, "k")))
    return [(destination, int(count)) for destination, count in rows]


def print_highest_rated_routes(db: AirBookingDB, limit: int) -> int:
    return db.execute_query_and_print_result(queries.highest_rated_routes(_require_positive(limit, "k")))


def flights_by_duration(db: AirBookingDB, origin: str, destination: str, limit: int) -> List[List[Optional[str]]]:
    return db.execute_query_and_return_result(
        queries.flights_by_duration(origin, destination, _require_positive(limit, "k"))
    )


# Bookings

def seat_availability(db: AirBookingDB, flight: FlightInfo, departure: date) -> SeatAvailability:
    rows = db.execute_query_and_return_result(queries.booking_count(flight.flight_number, departure))
    return SeatAvailability(flight=flight, departure=departure, booked=int(rows[0][0]))


def book_flight(db: AirBookingDB, *, passenger_id: int, flight_number: str, departure: date) -> str:
    """Book a seat and return the booking reference."""

    flight = get_flight(db, flight_number)
    if seat_availability(db, flight, departure).available <= 0:
        raise FlightFullError(f"flight {flight_number} is fully booked on {departure.isoformat()}")
    if db.execute_query(queries.passenger_booking(passenger_id, flight_number, departure)):
        raise DuplicateBookingError("you already booked this same flight and departure date")
    reference = db.execute_update(
        queries.insert_booking(departure=departure, flight_number=flight_number, passenger_id=passenger_id)
    )
    logger.info("booked %s on %s for passenger %s", flight_number, departure.isoformat(), passenger_id)
    return str(reference)


# Ratings

def has_booking(db: AirBookingDB, passenger_id: int, flight_number: str) -> bool:
    return bool(db.execute_query(queries.passenger_booking(passenger_id, flight_number)))


def add_rating(
    db: AirBookingDB,
    *,
    passenger_id: int,
    flight_number: str,
    score: int,
    comment: Optional[str] = None,
) -> int:
    if not validation.MIN_SCORE <= score <= validation.MAX_SCORE:
        raise ValueError(f"score must be between {validation.MIN_SCORE} and {validation.MAX_SCORE}")
    if not has_booking(db, passenger_id, flight_number):
        raise BookingNotFoundError(f"passenger {passenger_id} has no booking on flight {flight_number}")
    if db.execute_query(queries.passenger_rating(passenger_id, flight_number)):
        raise DuplicateRatingError(f"you already rated flight {flight_number}")
    rating_id = db.execute_update(
        queries.insert_rating(
            passenger_id=passenger_id,
            flight_number=flight_number,
            score=score,
            comment=comment,
        )
    )
    logger.info("passenger %s rated %s with %s", passenger_id, flight_number, score)
    return int(rating_id)
