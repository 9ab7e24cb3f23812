"""HTTP handlers for owners, pets, services and appointments."""

import json
from typing import Any, Callable, Optional

from bson import ObjectId
from flask import Blueprint, Response, jsonify, request
from pymongo.errors import PyMongoError

from .models import NULL_OBJECT_ID, Appointment, Model, parse_object_id
from .repository import NotFoundError, Repository, Store

INVALID_ID = "ID tidak valid"
NOT_FOUND = "Data tidak ditemukan"
APPOINTMENT_NOT_FOUND = "Data janji temu tidak ditemukan"
REQUIRED_FIELDS_MISSING = "Field wajib tidak boleh kosong"
INVALID_SERVICE = "Nama atau harga tidak valid"
UPDATED = "Data berhasil diperbarui"
DELETED = "Data berhasil dihapus"
UNPROCESSABLE = "Unprocessable Entity"

Validator = Callable[[Any], Optional[str]]


class _HttpError(Exception):
    """Ends a request with a plain-text reply."""

    def __init__(self, status: int, message: str):
        super().__init__(message)
        self.status = status
        self.message = message


def _text(message: str, status: int) -> Response:
    return Response(message, status=status, mimetype="text/plain")


def _object_id(raw: str) -> ObjectId:
    try:
        return parse_object_id(raw)
    except ValueError:
        raise _HttpError(400, INVALID_ID) from None


def _read_body(model):
    """Decode the JSON request body into a record of ``model``."""
    if not request.mimetype.endswith("json"):
        raise _HttpError(400, UNPROCESSABLE)
    try:
        data = json.loads(request.get_data(as_text=True))
    except ValueError as err:
        raise _HttpError(400, str(err)) from None
    try:
        return model.from_json(data)
    except ValueError as err:
        raise _HttpError(400, str(err)) from None


def _data_fields(item: Model) -> dict:
    return {key: value for key, value in item.to_document().items() if key != "_id"}


def _validate_service(service) -> Optional[str]:
    if not service.name or service.price < 0:
        return INVALID_SERVICE
    return None


def _validate_appointment(appointment: Appointment) -> Optional[str]:
    if (
        appointment.pet_id == NULL_OBJECT_ID
        or appointment.service_id == NULL_OBJECT_ID
        or appointment.date == ""
    ):
        return REQUIRED_FIELDS_MISSING
    return None


def _get_or_empty(repository: Repository, object_id: ObjectId) -> Model:
    try:
        return repository.get(object_id)
    except (NotFoundError, PyMongoError):
        return repository.model()


def _add_resource(
    blueprint: Blueprint,
    name: str,
    repository: Repository,
    validate: Optional[Validator] = None,
    get_one: Optional[Callable[[str], Any]] = None,
) -> None:
    def list_items():
        try:
            items = repository.all()
        except PyMongoError as err:
            return _text(str(err), 500)
        return jsonify([item.to_json() for item in items])

    def get_item(object_id):
        oid = _object_id(object_id)
        try:
            item = repository.get(oid)
        except (NotFoundError, PyMongoError):
            return _text(NOT_FOUND, 404)
        return jsonify(item.to_json())

    def create_item():
        item = _read_body(repository.model)
        if validate is not None:
            problem = validate(item)
            if problem:
                return _text(problem, 400)
        item.id = ObjectId()
        try:
            repository.create(item)
        except PyMongoError as err:
            return _text(str(err), 500)
        return jsonify(item.to_json()), 201

    def update_item(object_id):
        oid = _object_id(object_id)
        item = _read_body(repository.model)
        try:
            repository.update(oid, _data_fields(item))
        except PyMongoError as err:
            return _text(str(err), 500)
        return jsonify(message=UPDATED)

    def delete_item(object_id):
        oid = _object_id(object_id)
        try:
            repository.delete(oid)
        except PyMongoError as err:
            return _text(str(err), 500)
        return jsonify(message=DELETED)

    collection_rule = f"/{name}/"
    item_rule = f"/{name}/<object_id>/"
    routes = [
        (collection_rule, "list", list_items, "GET"),
        (collection_rule, "create", create_item, "POST"),
        (item_rule, "get", get_one or get_item, "GET"),
        (item_rule, "update", update_item, "PUT"),
        (item_rule, "delete", delete_item, "DELETE"),
    ]
    for rule, action, view, method in routes:
        blueprint.add_url_rule(
            rule,
            endpoint=f"{name}_{action}",
            view_func=view,
            methods=[method],
            strict_slashes=False,
        )


def create_api(store: Store) -> Blueprint:
    """Blueprint with the CRUD routes of every resource in ``store``."""
    blueprint = Blueprint("api", __name__)

    @blueprint.errorhandler(_HttpError)
    def _reply(err: _HttpError):
        return _text(err.message, err.status)

    def get_appointment_with_details(object_id):
        oid = _object_id(object_id)
        try:
            appointment = store.appointments.get(oid)
        except (NotFoundError, PyMongoError):
            return _text(APPOINTMENT_NOT_FOUND, 404)
        pet = _get_or_empty(store.pets, appointment.pet_id)
        service = _get_or_empty(store.services, appointment.service_id)
        return jsonify(
            appointment=appointment.to_json(),
            pet=pet.to_json(),
            service=service.to_json(),
        )

    _add_resource(blueprint, "pets", store.pets)
    _add_resource(blueprint, "owners", store.owners)
    _add_resource(
        blueprint,
        "appointments",
        store.appointments,
        validate=_validate_appointment,
        get_one=get_appointment_with_details,
    )
    _add_resource(blueprint, "services", store.services, validate=_validate_service)
    return blueprint