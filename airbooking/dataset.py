"""Utilities to populate the database with sample data for tests and demos."""
from __future__ import annotations

import random
from collections import Counter
from datetime import date, timedelta
from typing import Dict, Sequence, Set, Tuple

from sqlalchemy.orm import Session, sessionmaker

from .models import Airline, Booking, Flight, Passenger, Rating

AIRPORTS: Sequence[str] = (
    "ATL",
    "PEK",
    "DXB",
    "LAX",
    "HND",
    "ORD",
    "LHR",
    "HKG",
    "PVG",
    "CDG",
)
AIRLINES = ("Skyward", "Blue Heron Air", "Polar Wings", "Sunline", "Meridian", "Coastal Jet")
PLANES = ("A320", "A350", "B737", "B787")
FIRST_NAMES = ("Ava", "Noah", "Liam", "Mia", "Lucas", "Emma", "Ethan", "Isabella")
LAST_NAMES = ("Johnson", "Williams", "Smith", "Brown", "Garcia", "Lee")
COUNTRIES = ("United States", "China", "France", "Japan", "Mexico", "Kenya")
COMMENTS = (None, "Great crew", "Late departure", "Comfortable seats", "Lost my luggage")

FIRST_DEPARTURE = date(2017, 1, 1)


def generate_sample_data(
    session_factory: sessionmaker[Session],
    *,
    airlines: int = 5,
    flights: int = 25,
    passengers: int = 50,
    bookings: int = 120,
    ratings: int = 40,
) -> Dict[str, int]:
    """Populate the database with deterministic pseudo-random data."""

    rng = random.Random(42)
    airlines = max(1, min(airlines, len(AIRLINES)))
    with session_factory() as session:
        for index in range(airlines):
            session.add(Airline(id=index + 1, name=AIRLINES[index]))
        flight_seats: Dict[str, int] = {}
        for index in range(flights):
            origin, destination = rng.sample(AIRPORTS, 2)
            number = f"AB{100 + index}"
            seats = rng.choice((2, 4, 150, 180))
            flight_seats[number] = seats
            session.add(
                Flight(
                    airline_id=rng.randint(1, airlines),
                    flight_number=number,
                    origin=origin,
                    destination=destination,
                    plane=rng.choice(PLANES),
                    seats=seats,
                    duration=rng.randint(1, 14),
                )
            )
        people = []
        for index in range(passengers):
            people.append(
                Passenger(
                    passport_number=f"P{index:07d}",
                    full_name=f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}",
                    birth_date=date(1950, 1, 1) + timedelta(days=rng.randint(0, 18000)),
                    country=rng.choice(COUNTRIES),
                )
            )
        session.add_all(people)
        session.flush()
        passenger_ids = [person.id for person in people]
        session.commit()

    if not flight_seats or not passenger_ids:
        return {"airlines": airlines, "flights": 0, "passengers": 0, "bookings": 0, "ratings": 0}

    flight_numbers = sorted(flight_seats)
    booked: Set[Tuple[date, str, int]] = set()
    load: Counter = Counter()
    with session_factory() as session:
        for _ in range(bookings):
            flight_number = rng.choice(flight_numbers)
            departure = FIRST_DEPARTURE + timedelta(days=rng.randint(0, 30))
            passenger_id = rng.choice(passenger_ids)
            key = (departure, flight_number, passenger_id)
            if key in booked or load[flight_number, departure] >= flight_seats[flight_number]:
                continue
            booked.add(key)
            load[flight_number, departure] += 1
            session.add(Booking(departure=departure, flight_number=flight_number, passenger_id=passenger_id))

        rated: Set[Tuple[int, str]] = set()
        candidates = sorted({(passenger_id, flight_number) for _, flight_number, passenger_id in booked})
        rng.shuffle(candidates)
        for passenger_id, flight_number in candidates[:ratings]:
            rated.add((passenger_id, flight_number))
            session.add(
                Rating(
                    passenger_id=passenger_id,
                    flight_number=flight_number,
                    score=rng.randint(1, 5),
                    comment=rng.choice(COMMENTS),
                )
            )
        session.commit()
    return {
        "airlines": airlines,
        "flights": flights,
        "passengers": passengers,
        "bookings": len(booked),
        "ratings": len(rated),
    }
