import copy

import pytest
from bson import ObjectId

from petshop.models import Appointment, Owner, Pet, Service
from petshop.repository import NotFoundError, OwnerRepository, Repository, Store


class FakeCollection:
    def __init__(self):
        self.docs = []

    def _matches(self, doc, query):
        return all(doc.get(k) == v for k, v in query.items())

    def find(self, query):
        return iter([copy.deepcopy(d) for d in self.docs if self._matches(d, query)])

    def find_one(self, query):
        return next(self.find(query), None)

    def insert_one(self, doc):
        doc.setdefault("_id", ObjectId())
        self.docs.append(copy.deepcopy(doc))

    def update_one(self, query, update):
        for doc in self.docs:
            if self._matches(doc, query):
                doc.update(update["$set"])
                return

    def delete_one(self, query):
        for index, doc in enumerate(self.docs):
            if self._matches(doc, query):
                del self.docs[index]
                return

    def count_documents(self, query):
        return sum(1 for d in self.docs if self._matches(d, query))


class FakeDatabase(dict):
    def __missing__(self, name):
        collection = self[name] = FakeCollection()
        return collection


@pytest.fixture
def database():
    return FakeDatabase()


@pytest.fixture
def pets(database):
    return Repository(database, "pets", Pet)


def test_create_then_get(pets):
    pet = Pet(id=ObjectId(), name="Rex", species="Dog", age=4, owner_id=ObjectId())
    pets.create(pet)
    assert pets.get(pet.id) == pet


def test_all_returns_every_record(pets):
    created = [Pet(id=ObjectId(), name=name) for name in ("Bella", "Max", "Luna")]
    for pet in created:
        pets.create(pet)
    assert pets.all() == created


def test_all_empty(pets):
    assert pets.all() == []


def test_get_missing_raises(pets):
    with pytest.raises(NotFoundError):
        pets.get(ObjectId())


def test_update_sets_fields(pets):
    pet = Pet(id=ObjectId(), name="Rex", age=2)
    pets.create(pet)
    pets.update(pet.id, {"name": "Max", "age": 3})
    assert pets.get(pet.id) == Pet(id=pet.id, name="Max", age=3)


def test_update_missing_changes_nothing(pets):
    pet = Pet(id=ObjectId(), name="Rex")
    pets.create(pet)
    pets.update(ObjectId(), {"name": "Other"})
    assert pets.all() == [pet]


def test_delete_removes(pets):
    keep = Pet(id=ObjectId(), name="Keep")
    gone = Pet(id=ObjectId(), name="Gone")
    pets.create(keep)
    pets.create(gone)
    pets.delete(gone.id)
    assert pets.all() == [keep]
    with pytest.raises(NotFoundError):
        pets.get(gone.id)


def test_create_writes_document_form(database, pets):
    pet = Pet(id=ObjectId(), name="Milo", species="Cat", age=1)
    pets.create(pet)
    assert database["pets"].docs == [pet.to_document()]


def test_exists_by_email(database):
    owners = OwnerRepository(database)
    owners.create(Owner(id=ObjectId(), name="Ann", email="ann@example.com"))
    assert owners.exists_by_email("ann@example.com") is True
    assert owners.exists_by_email("bob@example.com") is False


def test_store_uses_named_collections(database):
    store = Store(database)
    owner = Owner(id=ObjectId(), name="Ann")
    service = Service(id=ObjectId(), name="Bath", price=100000)
    appointment = Appointment(id=ObjectId(), date="2024-01-01", note="Regular checkup")
    store.owners.create(owner)
    store.services.create(service)
    store.appointments.create(appointment)
    assert database["owners"].docs == [owner.to_document()]
    assert database["services"].docs == [service.to_document()]
    assert store.appointments.get(appointment.id) == appointment
    assert store.pets.all() == []