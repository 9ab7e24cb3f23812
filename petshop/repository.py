"""Collections of records stored in the database."""

from typing import Any, Generic, List, Mapping, Type, TypeVar

import pymongo
from bson import ObjectId

from .models import Appointment, Model, Owner, Pet, Service

OPERATION_TIMEOUT_SECONDS = 10

M = TypeVar("M", bound=Model)


class NotFoundError(LookupError):
    """Raised when no record has the requested id."""


class Repository(Generic[M]):
    """Reads and writes one kind of record in one collection."""

    def __init__(self, database, collection_name: str, model: Type[M]):
        self.collection_name = collection_name
        self.model = model
        self._collection = database[collection_name]

    def all(self) -> List[M]:
        with pymongo.timeout(OPERATION_TIMEOUT_SECONDS):
            return [self.model.from_document(doc) for doc in self._collection.find({})]

    def get(self, object_id: ObjectId) -> M:
        with pymongo.timeout(OPERATION_TIMEOUT_SECONDS):
            document = self._collection.find_one({"_id": object_id})
        if document is None:
            raise NotFoundError(f"no record {object_id} in {self.collection_name}")
        return self.model.from_document(document)

    def create(self, item: M) -> None:
        with pymongo.timeout(OPERATION_TIMEOUT_SECONDS):
            self._collection.insert_one(item.to_document())

    def update(self, object_id: ObjectId, fields: Mapping[str, Any]) -> None:
        """Set ``fields`` on the record; a missing record is not an error."""
        with pymongo.timeout(OPERATION_TIMEOUT_SECONDS):
            self._collection.update_one({"_id": object_id}, {"$set": dict(fields)})

    def delete(self, object_id: ObjectId) -> None:
        with pymongo.timeout(OPERATION_TIMEOUT_SECONDS):
            self._collection.delete_one({"_id": object_id})


class OwnerRepository(Repository[Owner]):
    """Owners, with a lookup by e-mail address."""

    def __init__(self, database):
        super().__init__(database, "owners", Owner)

    def exists_by_email(self, email: str) -> bool:
        with pymongo.timeout(OPERATION_TIMEOUT_SECONDS):
            return self._collection.count_documents({"email": email}) > 0


class Store:
    """All repositories of the pet shop database."""

    def __init__(self, database):
        self.owners = OwnerRepository(database)
        self.pets: Repository[Pet] = Repository(database, "pets", Pet)
        self.services: Repository[Service] = Repository(database, "services", Service)
        self.appointments: Repository[Appointment] = Repository(
            database, "appointments", Appointment
        )