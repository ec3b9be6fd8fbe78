"""Statement builders for every menu action.

Each function returns a SQLAlchemy statement; nothing here touches a
connection, so the statements can be inspected or compiled in isolation.
"""
from __future__ import annotations

from datetime import date
from typing import Mapping, Optional

from sqlalchemy import Insert, Select, Update, func, insert, select, update

from .models import Airline, Booking, Flight, Passenger, Rating

FLIGHT_COLUMNS = (
    Flight.airline_id.label("airid"),
    Flight.flight_number.label("flightnum"),
    Flight.origin.label("origin"),
    Flight.destination.label("destination"),
    Flight.plane.label("plane"),
    Flight.seats.label("seats"),
    Flight.duration.label("duration"),
)

UPDATABLE_FLIGHT_FIELDS = ("origin", "destination", "plane", "seats", "duration")


# Passengers

def insert_passenger(*, passport_number: str, full_name: str, birth_date: date, country: str) -> Insert:
    return insert(Passenger).values(
        {
            Passenger.passport_number: passport_number,
            Passenger.full_name: full_name,
            Passenger.birth_date: birth_date,
            Passenger.country: country,
        }
    )


def passenger_by_name(full_name: str, passport_number: Optional[str] = None) -> Select:
    stmt = select(Passenger.id.label("pid"), Passenger.full_name.label("fullname")).where(
        Passenger.full_name == full_name
    )
    if passport_number is not None:
        stmt = stmt.where(Passenger.passport_number == passport_number)
    return stmt.order_by(Passenger.id)


def passenger_by_passport(passport_number: str) -> Select:
    return select(Passenger.id.label("pid")).where(Passenger.passport_number == passport_number)


# Airlines

def all_airlines() -> Select:
    return select(Airline.id.label("airid"), Airline.name.label("name")).order_by(Airline.id)


def airline_by_id(airline_id: int) -> Select:
    return select(Airline.id.label("airid"), Airline.name.label("name")).where(Airline.id == airline_id)


# Flights

def flight_by_number(flight_number: str) -> Select:
    return select(*FLIGHT_COLUMNS).where(Flight.flight_number == flight_number)


def flights_between(origin: str, destination: str) -> Select:
    return (
        select(*FLIGHT_COLUMNS)
        .where(Flight.origin == origin, Flight.destination == destination)
        .order_by(Flight.flight_number)
    )


def route_listing(origin: str, destination: str) -> Select:
    return (
        select(
            Flight.flight_number.label("flightnum"),
            Flight.origin.label("origin"),
            Flight.destination.label("destination"),
            Flight.plane.label("plane"),
            Flight.duration.label("duration"),
        )
        .where(Flight.destination == destination, Flight.origin == origin)
        .order_by(Flight.flight_number)
    )


def flights_from(origin: str) -> Select:
    return select(Flight.flight_number).where(Flight.origin == origin).limit(1)


def flights_to(destination: str) -> Select:
    return select(Flight.flight_number).where(Flight.destination == destination).limit(1)


def insert_flight(
    *,
    airline_id: int,
    flight_number: str,
    origin: str,
    destination: str,
    plane: str,
    seats: int,
    duration: int,
) -> Insert:
    return insert(Flight).values(
        {
            Flight.airline_id: airline_id,
            Flight.flight_number: flight_number,
            Flight.origin: origin,
            Flight.destination: destination,
            Flight.plane: plane,
            Flight.seats: seats,
            Flight.duration: duration,
        }
    )


def update_flight(flight_number: str, changes: Mapping[str, object]) -> Update:
    unknown = set(changes) - set(UPDATABLE_FLIGHT_FIELDS)
    if unknown:
        raise ValueError(f"cannot update flight field(s): {', '.join(sorted(unknown))}")
    if not changes:
        raise ValueError("no flight fields to update")
    values = {getattr(Flight, name): value for name, value in changes.items()}
    return update(Flight).where(Flight.flight_number == flight_number).values(values)


def popular_destinations(limit: int) -> Select:
    flight_count = func.count(Flight.flight_number).label("flights")
    return (
        select(Flight.destination.label("destination"), flight_count)
        .group_by(Flight.destination)
        .order_by(flight_count.desc(), Flight.destination)
        .limit(limit)
    )


def highest_rated_routes(limit: int) -> Select:
    average = func.avg(Rating.score).label("average_score")
    return (
        select(
            Airline.name.label("airline"),
            Flight.flight_number.label("flightnum"),
            Flight.origin.label("origin"),
            Flight.destination.label("destination"),
            average,
        )
        .select_from(Rating)
        .join(Flight, Rating.flight_number == Flight.flight_number)
        .join(Airline, Flight.airline_id == Airline.id)
        .group_by(Airline.name, Flight.flight_number, Flight.origin, Flight.destination)
        .order_by(average.desc(), Flight.flight_number)
        .limit(limit)
    )


def flights_by_duration(origin: str, destination: str, limit: int) -> Select:
    return (
        select(
            Airline.name.label("airline"),
            Flight.flight_number.label("flightnum"),
            Flight.origin.label("origin"),
            Flight.destination.label("destination"),
            Flight.duration.label("duration"),
            Flight.plane.label("plane"),
        )
        .select_from(Flight)
        .join(Airline, Flight.airline_id == Airline.id)
        .where(Flight.origin == origin, Flight.destination == destination)
        .order_by(Flight.duration.asc(), Flight.flight_number)
        .limit(limit)
    )


# Bookings

def booking_count(flight_number: str, departure: date) -> Select:
    return select(func.count()).select_from(Booking).where(
        Booking.flight_number == flight_number, Booking.departure == departure
    )


def passenger_booking(passenger_id: int, flight_number: str, departure: Optional[date] = None) -> Select:
    stmt = select(Booking.reference.label("bookref")).where(
        Booking.passenger_id == passenger_id, Booking.flight_number == flight_number
    )
    if departure is not None:
        stmt = stmt.where(Booking.departure == departure)
    return stmt


def insert_booking(*, departure: date, flight_number: str, passenger_id: int) -> Insert:
    return insert(Booking).values(
        {
            Booking.departure: departure,
            Booking.flight_number: flight_number,
            Booking.passenger_id: passenger_id,
        }
    ).returning(Booking.reference)


# Ratings

def passenger_rating(passenger_id: int, flight_number: str) -> Select:
    return select(Rating.id.label("rid")).where(
        Rating.passenger_id == passenger_id, Rating.flight_number == flight_number
    )


def insert_rating(*, passenger_id: int, flight_number: str, score: int, comment: Optional[str]) -> Insert:
    return insert(Rating).values(
        {
            Rating.passenger_id: passenger_id,
            Rating.flight_number: flight_number,
            Rating.score: score,
            Rating.comment: comment,
        }
    )
