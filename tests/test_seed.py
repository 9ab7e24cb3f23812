import random
from datetime import datetime, timedelta, timezone

import pytest

from petshop import seed


class FakeCollection:
    def __init__(self):
        self.documents = []

    def insert_many(self, documents):
        self.documents.extend(dict(doc) for doc in documents)

    def find(self, query):
        assert query == {}
        return iter(list(self.documents))


class FakeDatabase(dict):
    def __missing__(self, key):
        collection = FakeCollection()
        self[key] = collection
        return collection


def _parse(text):
    return datetime.fromisoformat(text.replace("Z", "+00:00"))


def test_generate_name_uses_known_names():
    rng = random.Random(7)
    for _ in range(50):
        first, last = seed.generate_name(rng).split(" ")
        assert first in seed.FIRST_NAMES
        assert last in seed.LAST_NAMES


def test_generate_name_is_reproducible_with_same_seed():
    rng_a = random.Random(3)
    rng_b = random.Random(3)
    names_a = [seed.generate_name(rng_a) for _ in range(10)]
    names_b = [seed.generate_name(rng_b) for _ in range(10)]
    assert names_a == names_b
    assert len(names_a) == 10
    for name in names_a:
        first, last = name.split(" ")
        assert first in seed.FIRST_NAMES
        assert last in seed.LAST_NAMES


def test_generate_phone_format():
    rng = random.Random(11)
    for _ in range(50):
        phone = seed.generate_phone(rng)
        assert phone.startswith("+628")
        assert len(phone) == 13
        assert phone[4:].isdigit()


def test_generate_pet_name_and_note_from_lists():
    rng = random.Random(5)
    for _ in range(30):
        assert seed.generate_pet_name(rng) in seed.PET_NAMES
        assert seed.generate_appointment_note(rng) in seed.APPOINTMENT_NOTES


def test_appointment_date_within_three_months_utc():
    now = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)
    latest = datetime(2024, 4, 15, 12, 0, tzinfo=timezone.utc)
    rng = random.Random(1)
    for _ in range(100):
        text = seed.generate_appointment_date(rng, now)
        assert text.endswith("Z")
        assert now <= _parse(text) < latest


def test_appointment_date_month_overflow_rolls_over():
    now = datetime(2023, 11, 30, tzinfo=timezone.utc)
    latest = datetime(2024, 3, 1, tzinfo=timezone.utc)
    rng = random.Random(2)
    for _ in range(200):
        assert now <= _parse(seed.generate_appointment_date(rng, now)) < latest


def test_appointment_date_keeps_offset():
    zone = timezone(timedelta(hours=7))
    now = datetime(2024, 6, 1, 8, 30, tzinfo=zone)
    text = seed.generate_appointment_date(random.Random(4), now)
    assert text.endswith("+07:00")
    assert _parse(text) >= now


def test_seed_owners_inserts_numbered_emails():
    database = FakeDatabase()
    owners = seed.seed_owners(database, 20, random.Random(0))
    documents = database["owners"].documents
    assert len(documents) == 20
    assert documents[0]["email"] == "owner1@example.com"
    assert documents[19]["email"] == "owner20@example.com"
    assert len({doc["_id"] for doc in documents}) == 20
    assert [o.id for o in owners] == [doc["_id"] for doc in documents]


def test_seed_owners_rejects_negative_count():
    with pytest.raises(ValueError):
        seed.seed_owners(FakeDatabase(), -1)


def test_seed_pets_reference_owners():
    database = FakeDatabase()
    seed.seed_owners(database, 5, random.Random(0))
    owner_ids = {doc["_id"] for doc in database["owners"].documents}
    seed.seed_pets(database, 20, random.Random(1))
    pets = database["pets"].documents
    assert len(pets) == 20
    for pet in pets:
        assert pet["owner_id"] in owner_ids
        assert 1 <= pet["age"] <= 10
        assert pet["species"] in seed.SPECIES
        assert pet["name"] in seed.PET_NAMES


def test_seed_pets_without_owners_fails():
    with pytest.raises(RuntimeError, match="no owners"):
        seed.seed_pets(FakeDatabase(), 3)


def test_seed_services_inserts_catalogue():
    database = FakeDatabase()
    seed.seed_services(database)
    documents = database["services"].documents
    assert [doc["name"] for doc in documents] == [
        "Grooming", "Vaccination", "Dental Cleaning", "Nail Trim", "Bath",
    ]
    assert documents[0]["price"] == 150000
    assert documents[2]["description"] == "Professional dental cleaning"


def test_seed_appointments_without_pets_fails():
    database = FakeDatabase()
    seed.seed_services(database)
    with pytest.raises(RuntimeError, match="no pets or services"):
        seed.seed_appointments(database, 3)


def test_seed_appointments_reference_pets_and_services():
    database = FakeDatabase()
    rng = random.Random(9)
    seed.seed_owners(database, 3, rng)
    seed.seed_pets(database, 4, rng)
    seed.seed_services(database)
    seed.seed_appointments(database, 10, rng)
    pet_ids = {doc["_id"] for doc in database["pets"].documents}
    service_ids = {doc["_id"] for doc in database["services"].documents}
    appointments = database["appointments"].documents
    assert len(appointments) == 10
    for appointment in appointments:
        assert appointment["pet_id"] in pet_ids
        assert appointment["service_id"] in service_ids
        assert appointment["note"] in seed.APPOINTMENT_NOTES
        assert appointment["date"]


def test_seed_database_fills_every_collection():
    database = FakeDatabase()
    seed.seed_database(database, 20, random.Random(0))
    counts = {name: len(database[name].documents) for name in
              ("owners", "pets", "services", "appointments")}
    assert counts == {"owners": 20, "pets": 20, "services": 5, "appointments": 20}


def test_main_without_connection_string_fails(monkeypatch):
    monkeypatch.delenv("MONGOSTRING", raising=False)
    assert seed.main([]) == 1


def test_main_rejects_bad_count():
    with pytest.raises(SystemExit) as info:
        seed.main(["--count", "many"])
    assert info.value.code == 2