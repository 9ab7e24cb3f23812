"""Fill the pet shop database with random sample records."""

import argparse
import logging
import math
import random
from datetime import datetime, timedelta
from typing import List, Optional, Sequence

from bson import ObjectId
from pymongo.errors import PyMongoError

from .config import connect_db, get_database
from .models import Appointment, Owner, Pet, Service

DEFAULT_COUNT = 20
APPOINTMENT_WINDOW_MONTHS = 3

FIRST_NAMES = (
    "John", "Sarah", "Michael", "Emily", "David",
    "Jessica", "Daniel", "Olivia", "James", "Sophia",
)
LAST_NAMES = (
    "Smith", "Johnson", "Williams", "Brown", "Jones",
    "Garcia", "Miller", "Davis", "Rodriguez", "Martinez",
)
PET_NAMES = (
    "Bella", "Max", "Luna", "Charlie", "Oliver",
    "Lucy", "Cooper", "Daisy", "Rocky", "Milo",
)
SPECIES = ("Dog", "Cat", "Bird", "Fish", "Rabbit")
APPOINTMENT_NOTES = (
    "Regular checkup",
    "Annual vaccination",
    "First grooming session",
    "Follow-up appointment",
    "Emergency visit",
)
SERVICE_CATALOGUE = (
    ("Grooming", "Full body grooming", 150000),
    ("Vaccination", "Annual vaccination", 200000),
    ("Dental Cleaning", "Professional dental cleaning", 300000),
    ("Nail Trim", "Professional nail trimming", 50000),
    ("Bath", "Professional bathing", 100000),
)

NO_OWNERS = "Cannot seed pets: no owners found. Please seed owners first."
NO_PETS_OR_SERVICES = (
    "Cannot seed appointments: no pets or services found. "
    "Please seed pets and services first."
)

logger = logging.getLogger(__name__)


def _rng(rng: Optional[random.Random]) -> random.Random:
    return rng if rng is not None else random.Random()


def _check_count(count: int) -> None:
    if count < 0:
        raise ValueError("count must not be negative")


def generate_name(rng: Optional[random.Random] = None) -> str:
    """A random first and last name."""
    rng = _rng(rng)
    return f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}"


def generate_phone(rng: Optional[random.Random] = None) -> str:
    """A random phone number of the form ``+628`` followed by nine digits."""
    rng = _rng(rng)
    return f"+628{rng.randrange(1_000_000_000):09d}"


def generate_pet_name(rng: Optional[random.Random] = None) -> str:
    """A random pet name."""
    return _rng(rng).choice(PET_NAMES)


def _add_months(moment: datetime, months: int) -> datetime:
    """Add calendar months, letting a day past the month's end roll over."""
    month_index = moment.month - 1 + months
    first = moment.replace(
        year=moment.year + month_index // 12, month=month_index % 12 + 1, day=1
    )
    return first + timedelta(days=moment.day - 1)


def _format_rfc3339(moment: datetime) -> str:
    text = moment.isoformat(timespec="seconds")
    if moment.utcoffset() == timedelta(0):
        text = text[: -len("+00:00")] + "Z"
    return text


def generate_appointment_date(
    rng: Optional[random.Random] = None, now: Optional[datetime] = None
) -> str:
    """A random moment from ``now`` up to three months later, as RFC 3339 text."""
    rng = _rng(rng)
    if now is None:
        now = datetime.now()
    if now.tzinfo is None:
        now = now.astimezone()
    latest = _add_months(now, APPOINTMENT_WINDOW_MONTHS)
    start = math.floor(now.timestamp())
    span = math.floor(latest.timestamp()) - start
    if span <= 0:
        raise ValueError("appointment window is empty")
    stamp = start + rng.randrange(span)
    return _format_rfc3339(datetime.fromtimestamp(stamp, tz=now.tzinfo))


def generate_appointment_note(rng: Optional[random.Random] = None) -> str:
    """A random appointment note."""
    return _rng(rng).choice(APPOINTMENT_NOTES)


def _insert(database, collection_name: str, records) -> None:
    if records:
        database[collection_name].insert_many([r.to_document() for r in records])


def _load(database, collection_name: str, model):
    return [model.from_document(doc) for doc in database[collection_name].find({})]


def seed_owners(
    database, count: int = DEFAULT_COUNT, rng: Optional[random.Random] = None
) -> List[Owner]:
    """Insert ``count`` random owners and return them."""
    _check_count(count)
    rng = _rng(rng)
    owners = [
        Owner(
            id=ObjectId(),
            name=generate_name(rng),
            email=f"owner{number}@example.com",
            phone=generate_phone(rng),
        )
        for number in range(1, count + 1)
    ]
    _insert(database, "owners", owners)
    return owners


def seed_pets(
    database, count: int = DEFAULT_COUNT, rng: Optional[random.Random] = None
) -> List[Pet]:
    """Insert ``count`` random pets, each owned by a stored owner."""
    _check_count(count)
    rng = _rng(rng)
    owners = _load(database, "owners", Owner)
    if not owners:
        raise RuntimeError(NO_OWNERS)
    pets = [
        Pet(
            id=ObjectId(),
            name=generate_pet_name(rng),
            species=rng.choice(SPECIES),
            age=rng.randint(1, 10),
            owner_id=rng.choice(owners).id,
        )
        for _ in range(count)
    ]
    _insert(database, "pets", pets)
    return pets


def seed_services(database) -> List[Service]:
    """Insert the fixed catalogue of services and return them."""
    services = [
        Service(id=ObjectId(), name=name, description=description, price=price)
        for name, description, price in SERVICE_CATALOGUE
    ]
    _insert(database, "services", services)
    return services


def seed_appointments(
    database, count: int = DEFAULT_COUNT, rng: Optional[random.Random] = None
) -> List[Appointment]:
    """Insert ``count`` random appointments for stored pets and services."""
    _check_count(count)
    rng = _rng(rng)
    pets = _load(database, "pets", Pet)
    services = _load(database, "services", Service)
    if not pets or not services:
        raise RuntimeError(NO_PETS_OR_SERVICES)
    appointments = [
        Appointment(
            id=ObjectId(),
            pet_id=rng.choice(pets).id,
            service_id=rng.choice(services).id,
            date=generate_appointment_date(rng),
            note=generate_appointment_note(rng),
        )
        for _ in range(count)
    ]
    _insert(database, "appointments", appointments)
    return appointments


def seed_database(
    database, count: int = DEFAULT_COUNT, rng: Optional[random.Random] = None
) -> None:
    """Seed owners, pets, services and appointments in that order."""
    rng = _rng(rng)
    seed_owners(database, count, rng)
    seed_pets(database, count, rng)
    seed_services(database)
    seed_appointments(database, count, rng)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Connect to the database and fill it with sample records."""
    parser = argparse.ArgumentParser(
        prog="petshop-seed", description="Fill the pet shop database with sample data."
    )
    parser.add_argument(
        "--count", type=int, default=DEFAULT_COUNT, help="records of each kind to create"
    )
    args = parser.parse_args(argv)
    if args.count < 0:
        parser.error("--count must not be negative")

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")
    try:
        client = connect_db()
    except (ValueError, PyMongoError) as err:
        logger.error("%s", err)
        return 1

    try:
        seed_database(get_database(client), args.count)
    except (RuntimeError, PyMongoError) as err:
        logger.error("%s", err)
        return 1
    finally:
        client.close()

    print("Database seeding completed successfully!")
    return 0