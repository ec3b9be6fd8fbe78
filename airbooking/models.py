"""SQLAlchemy models for the airline booking schema."""
from __future__ import annotations

import secrets
from datetime import date
from typing import List, Optional

from sqlalchemy import CheckConstraint, Date, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    pass


def new_booking_ref() -> str:
    return secrets.token_hex(5).upper()


class Airline(Base):
    __tablename__ = "airline"

    id: Mapped[int] = mapped_column("airid", Integer, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(24), nullable=False)

    flights: Mapped[List["Flight"]] = relationship(back_populates="airline")


class Flight(Base):
    __tablename__ = "flight"
    __table_args__ = (
        CheckConstraint("seats > 0", name="ck_flight_seats_positive"),
        CheckConstraint("duration > 0", name="ck_flight_duration_positive"),
    )

    airline_id: Mapped[int] = mapped_column("airid", ForeignKey("airline.airid"), nullable=False)
    flight_number: Mapped[str] = mapped_column("flightnum", String(8), primary_key=True)
    origin: Mapped[str] = mapped_column(String(16), nullable=False)
    destination: Mapped[str] = mapped_column(String(16), nullable=False)
    plane: Mapped[str] = mapped_column(String(16), nullable=False)
    seats: Mapped[int] = mapped_column(Integer, nullable=False)
    duration: Mapped[int] = mapped_column(Integer, nullable=False)

    airline: Mapped[Airline] = relationship(back_populates="flights")
    bookings: Mapped[List["Booking"]] = relationship(back_populates="flight")
    ratings: Mapped[List["Rating"]] = relationship(back_populates="flight")


class Passenger(Base):
    __tablename__ = "passenger"
    __table_args__ = (UniqueConstraint("passnum", name="uq_passenger_passnum"),)

    id: Mapped[int] = mapped_column("pid", Integer, primary_key=True)
    passport_number: Mapped[str] = mapped_column("passnum", String(10), nullable=False)
    full_name: Mapped[str] = mapped_column("fullname", String(64), nullable=False)
    birth_date: Mapped[date] = mapped_column("bdate", Date, nullable=False)
    country: Mapped[str] = mapped_column(String(24), nullable=False)

    bookings: Mapped[List["Booking"]] = relationship(back_populates="passenger")
    ratings: Mapped[List["Rating"]] = relationship(back_populates="passenger")


class Booking(Base):
    __tablename__ = "booking"
    __table_args__ = (
        UniqueConstraint("departure", "flightnum", "pid", name="uq_booking_passenger_departure"),
    )

    reference: Mapped[str] = mapped_column("bookref", String(10), primary_key=True, default=new_booking_ref)
    departure: Mapped[date] = mapped_column(Date, nullable=False)
    flight_number: Mapped[str] = mapped_column("flightnum", ForeignKey("flight.flightnum"), nullable=False)
    passenger_id: Mapped[int] = mapped_column("pid", ForeignKey("passenger.pid"), nullable=False)

    flight: Mapped[Flight] = relationship(back_populates="bookings")
    passenger: Mapped[Passenger] = relationship(back_populates="bookings")


class Rating(Base):
    __tablename__ = "ratings"
    __table_args__ = (
        UniqueConstraint("pid", "flightnum", name="uq_rating_passenger_flight"),
        CheckConstraint("score >= 0 AND score <= 5", name="ck_rating_score_range"),
    )

    id: Mapped[int] = mapped_column("rid", Integer, primary_key=True)
    passenger_id: Mapped[int] = mapped_column("pid", ForeignKey("passenger.pid"), nullable=False)
    flight_number: Mapped[str] = mapped_column("flightnum", ForeignKey("flight.flightnum"), nullable=False)
    score: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    passenger: Mapped[Passenger] = relationship(back_populates="ratings")
    flight: Mapped[Flight] = relationship(back_populates="ratings")
