"""Terminal client for managing airline booking data."""
from .cli import main as cli_main
from .config import Settings
from .database import AirBookingDB, create_db_engine, init_db
from .dataset import generate_sample_data
from .prompts import MenuExit, Prompter
from .services import (
    AirBookingError,
    DuplicateBookingError,
    DuplicateFlightError,
    DuplicatePassengerError,
    DuplicateRatingError,
    FlightFullError,
    FlightNotFoundError,
    PassengerNotFoundError,
    add_flight,
    add_passenger,
    add_rating,
    book_flight,
    seat_availability,
)

__all__ = [
    "AirBookingDB",
    "AirBookingError",
    "DuplicateBookingError",
    "DuplicateFlightError",
    "DuplicatePassengerError",
    "DuplicateRatingError",
    "FlightFullError",
    "FlightNotFoundError",
    "MenuExit",
    "PassengerNotFoundError",
    "Prompter",
    "Settings",
    "add_flight",
    "add_passenger",
    "add_rating",
    "book_flight",
    "cli_main",
    "create_db_engine",
    "generate_sample_data",
    "init_db",
    "seat_availability",
]
