"""Main menu loop and the interactive handler for each option."""
from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError

from . import services, validation
from .database import AirBookingDB, render_table
from .prompts import MenuExit, Prompter

logger = logging.getLogger(__name__)

Handler = Callable[[AirBookingDB, Prompter], None]


def add_passenger(db: AirBookingDB, prompter: Prompter) -> None:
    first_name = prompter.ask("Enter your first name:")
    last_name = prompter.ask("Enter your last name:")
    birth_date = prompter.ask("Enter your birth date (mm/dd/yyyy):", validation.parse_birth_date)
    passport_number = prompter.ask("Enter your passport number:", validation.parse_passport_number)
    country = prompter.ask("Enter the country you are from:")
    passenger_id = services.add_passenger(
        db,
        first_name=first_name,
        last_name=last_name,
        birth_date=birth_date,
        passport_number=passport_number,
        country=country,
    )
    prompter.say(f"Welcome aboard, {first_name}! Your passenger id is {passenger_id}.")


def _identify_passenger(db: AirBookingDB, prompter: Prompter) -> Tuple[int, str]:
    while True:
        full_name = prompter.read("Enter your full name:").strip()
        passport_number = prompter.read("Enter your passport number:").strip()
        try:
            return services.find_passenger(db, full_name, passport_number), full_name
        except services.PassengerNotFoundError:
            prompter.retry_or_exit("You did not enter a valid full name or passport#.")


def _choose_route(db: AirBookingDB, prompter: Prompter) -> List[services.FlightInfo]:
    while True:
        origin = prompter.read("Enter where you plan to fly from:").strip()
        destination = prompter.read("Enter where you plan to fly to:").strip()
        flights = services.find_flights(db, origin, destination)
        if flights:
            return flights
        prompter.retry_or_exit(f"No flights from {origin} to {destination} are available.")


def book_flight(db: AirBookingDB, prompter: Prompter) -> None:
    passenger_id, full_name = _identify_passenger(db, prompter)
    prompter.say(f"Hi {full_name}!")
    flights = _choose_route(db, prompter)
    for index, flight in enumerate(flights):
        prompter.say(f"({index}) {flight.describe()}")
    index = prompter.choose_index(
        len(flights), "Enter the index, in the (), of the flight you would like to take."
    )
    flight = flights[index]
    departure = prompter.ask_date("you would like to take the flight")

    availability = services.seat_availability(db, flight, departure)
    prompter.say(f"Num of seats left: {availability.available}")
    if availability.available <= 0:
        prompter.say("Sorry! That flight is fully booked.")
        return
    if not prompter.confirm("Great! It seems like that date works. Would you like to book this flight?"):
        return
    reference = services.book_flight(
        db, passenger_id=passenger_id, flight_number=flight.flight_number, departure=departure
    )
    prompter.say(f"Your flight has been successfully booked! Booking reference: {reference}")


def review_flight(db: AirBookingDB, prompter: Prompter) -> None:
    while True:
        full_name = prompter.ask("Enter your full name:")
        try:
            passenger_id = services.find_passenger(db, full_name)
            break
        except services.PassengerNotFoundError:
            prompter.offer_exit("Passenger not found.")

    while True:
        flight_number = prompter.ask("Enter the flight number:", validation.parse_flight_number)
        if services.has_booking(db, passenger_id, flight_number):
            break
        prompter.offer_exit("Invalid flight number. Passenger not found for this flight.")

    score = prompter.ask(
        "Enter your rating score 1-5, where 1 is poor and 5 is excellent:", validation.parse_score
    )
    comment = validation.optional_text(prompter.read("Enter a comment (optional):"))
    services.add_rating(
        db, passenger_id=passenger_id, flight_number=flight_number, score=score, comment=comment
    )
    prompter.say("Thank you for your review!")


def _insert_flight(db: AirBookingDB, prompter: Prompter) -> None:
    services.print_airlines(db)
    while True:
        airline_id = prompter.ask_or_exit(
            "Please select the airline from the list above using its airId.", validation.parse_int
        )
        if services.airline_exists(db, airline_id):
            break
        prompter.say("Sorry, you entered an invalid airId.")

    origin = prompter.ask("Enter origin:")
    destination = prompter.ask("Enter destination:")
    plane = prompter.ask("Enter plane:")
    seats = prompter.ask("Enter seat number:", validation.int_between(1))
    duration = prompter.ask("Enter flight duration:", validation.int_between(1))
    while True:
        flight_number = prompter.ask("Enter flight number:", validation.parse_flight_number)
        try:
            services.add_flight(
                db,
                airline_id=airline_id,
                flight_number=flight_number,
                origin=origin,
                destination=destination,
                plane=plane,
                seats=seats,
                duration=duration,
            )
            break
        except services.DuplicateFlightError as exc:
            prompter.offer_exit(f"{exc}.")
    prompter.say("You have successfully created a flight!")


_FLIGHT_FIELD_PROMPTS: Tuple[Tuple[str, str, Callable[[str], object]], ...] = (
    ("origin", "origin", validation.require_text),
    ("destination", "destination", validation.require_text),
    ("plane", "plane", validation.require_text),
    ("seats", "seat number", validation.int_between(1)),
    ("duration", "duration", validation.int_between(1)),
)


def _update_flight(db: AirBookingDB, prompter: Prompter) -> None:
    flight_number = prompter.read("Enter flight number:").strip()
    while not services.print_flight(db, flight_number):
        flight_number = prompter.ask_or_exit(
            "No flight found. Please enter a flight number.", validation.require_text, exit_token="Exit"
        )

    changes: Dict[str, object] = {}
    for field, label, parse in _FLIGHT_FIELD_PROMPTS:
        if prompter.confirm(f"Would you like to update the {label}?"):
            changes[field] = prompter.ask(f"Please enter a new {label}:", parse)
    if not changes:
        prompter.say("Nothing to update.")
        return
    services.update_flight(db, flight_number, changes)
    prompter.say("You have successfully updated the flight!")
    services.print_flight(db, flight_number)


def insert_or_update_flight(db: AirBookingDB, prompter: Prompter) -> None:
    choice = prompter.ask(
        "Would you like to insert (enter 1) or update (enter 2) a flight? (Press 0 to exit)",
        validation.int_between(0, 2),
        exit_token="0",
    )
    if choice == 0:
        return
    if choice == 1:
        _insert_flight(db, prompter)
    else:
        _update_flight(db, prompter)


def list_flights_between(db: AirBookingDB, prompter: Prompter) -> None:
    while True:
        origin = prompter.read("Enter origin:").strip()
        destination = prompter.read("Enter destination:").strip()
        if services.print_route(db, origin, destination):
            return
        if not prompter.confirm(f"There are no flights from {origin} to {destination}. Would you like to try again?"):
            return


def list_popular_destinations(db: AirBookingDB, prompter: Prompter) -> None:
    k = prompter.ask("Enter the number of destinations you would like to see:", validation.int_between(1))
    for rank, (destination, flights) in enumerate(services.most_popular_destinations(db, k), start=1):
        noun = "flight" if flights == 1 else "flights"
        prompter.write(f"{rank}. {destination} ({flights} {noun})\n")


def list_highest_rated(db: AirBookingDB, prompter: Prompter) -> None:
    k = prompter.ask("Enter k:", validation.int_between(1))
    if services.print_highest_rated_routes(db, k) == 0:
        prompter.say("There are no reviews.")


def _ask_served(
    db: AirBookingDB, prompter: Prompter, label: str, served: Callable[[AirBookingDB, str], bool], what: str
) -> str:
    while True:
        value = prompter.ask(label)
        if served(db, value):
            return value
        prompter.offer_exit(f"Invalid {what}.")


def list_flights_by_duration(db: AirBookingDB, prompter: Prompter) -> None:
    origin = _ask_served(db, prompter, "Enter the flight origin:", services.origin_served, "origin")
    destination = _ask_served(
        db, prompter, "Enter the flight destination:", services.destination_served, "destination"
    )
    k = prompter.ask("Enter the number of flights you would like to see:", validation.int_between(1))
    rows = services.flights_by_duration(db, origin, destination, k)
    if not rows:
        prompter.say(f"No flights from {origin} to {destination}.")
        return
    headers = ["Airline", "Flight Number", "Origin", "Destination", "Duration", "Plane"]
    prompter.write("\n" + render_table(rows, headers, db.table_format) + "\n")


def find_available_seats(db: AirBookingDB, prompter: Prompter) -> None:
    flight_number = prompter.read("Enter Flight Number:").strip()
    while True:
        try:
            flight = services.get_flight(db, flight_number)
            break
        except services.FlightNotFoundError:
            flight_number = prompter.ask_or_exit(
                "Sorry you did not enter a valid flight number. Type the flight number again.",
                validation.require_text,
                exit_token="Exit",
            )
    departure = prompter.ask_date("of the flight you are looking for")
    prompter.say(services.seat_availability(db, flight, departure).describe())


MENU: Tuple[Tuple[str, Handler], ...] = (
    ("Add Passenger", add_passenger),
    ("Book Flight", book_flight),
    ("Review Flight", review_flight),
    ("Insert or Update Flight", insert_or_update_flight),
    ("List Flights From Origin to Destination", list_flights_between),
    ("List Most Popular Destinations", list_popular_destinations),
    ("List Highest Rated Destinations", list_highest_rated),
    ("List Flights to Destination in order of Duration", list_flights_by_duration),
    ("Find Number of Available Seats on a given Flight", find_available_seats),
)
EXIT_CHOICE = len(MENU) + 1


def render_menu() -> str:
    lines = ["MAIN MENU", "---------"]
    lines.extend(f"{number}. {label}" for number, (label, _) in enumerate(MENU, start=1))
    lines.append(f"{EXIT_CHOICE}. < EXIT")
    return "\n".join(lines) + "\n"


def read_choice(prompter: Prompter) -> int:
    while True:
        prompter.write("Please make your choice: ")
        line = prompter.stdin.readline()
        if line == "":
            raise EOFError("no more input")
        try:
            return int(line.strip())
        except ValueError:
            prompter.write("Your input is invalid!\n")


def run_action(handler: Handler, db: AirBookingDB, prompter: Prompter) -> bool:
    """Run one menu action; returns False if the action failed."""

    try:
        handler(db, prompter)
    except MenuExit:
        logger.debug("%s cancelled by user", handler.__name__)
    except (services.AirBookingError, ValueError, OverflowError, SQLAlchemyError) as exc:
        logger.error("%s", exc)
        return False
    return True


def main_loop(db: AirBookingDB, prompter: Optional[Prompter] = None) -> None:
    """Show the menu until the user picks exit or input runs out."""

    prompter = prompter or Prompter()
    while True:
        prompter.write(render_menu())
        try:
            choice = read_choice(prompter)
        except EOFError:
            return
        if choice == EXIT_CHOICE:
            return
        if not 1 <= choice <= len(MENU):
            continue
        try:
            run_action(MENU[choice - 1][1], db, prompter)
        except EOFError:
            return
