# petshop

A small HTTP backend for running a pet shop. It keeps owners, their pets,
the services the shop offers and the appointments that tie a pet to a
service, all stored in MongoDB, and exposes them through a JSON API.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Configuration

The MongoDB connection string is read from the `MONGOSTRING` environment
variable. It must start with `mongodb://` or `mongodb+srv://`; otherwise
the commands below log the error and exit with status 1. Data is kept in
the `petshop` database, in the collections `owners`, `pets`, `services`
and `appointments`. Connection and database operations time out after
10 seconds.

```
export MONGOSTRING="mongodb://localhost:27017"
```

## Running the server

```
petshop [--host HOST] [--port PORT]
```

By default the server listens on `0.0.0.0`, port 3000. Every response
carries `Access-Control-Allow-Origin: *`, CORS preflight requests are
answered with `204`, and each request is logged with its status, latency,
client address, method and path.

Every route lives under `/api`; a trailing slash is optional:

| Method | Path                      | Action                                   |
|--------|---------------------------|------------------------------------------|
| GET    | `/api/owners/`            | list owners                              |
| GET    | `/api/owners/<id>`        | one owner                                |
| POST   | `/api/owners/`            | create an owner                          |
| PUT    | `/api/owners/<id>`        | update an owner                          |
| DELETE | `/api/owners/<id>`        | delete an owner                          |
| GET    | `/api/pets/`              | list pets (same five routes as owners)   |
| GET    | `/api/services/`          | list services (same five routes)         |
| GET    | `/api/appointments/`      | list appointments (same five routes)     |
| GET    | `/api/appointments/<id>`  | appointment with its pet and service     |

Records are returned as JSON objects with an `id` field; object ids are
written as 24-character hexadecimal strings.

- An id that is not 24 hexadecimal digits answers `400` with `ID tidak valid`.
- A missing record answers `404` with `Data tidak ditemukan`
  (`Data janji temu tidak ditemukan` for appointments).
- `POST` and `PUT` bodies must be JSON (a content type ending in `json`,
  else `400 Unprocessable Entity`). Keys match field names
  case-insensitively, unknown keys are ignored, and missing or `null`
  fields take their empty value.
- `POST` answers `201` with the created record and its new id.
- A new appointment needs `pet_id`, `service_id` and `date`
  (`400 Field wajib tidak boleh kosong` otherwise); a new service needs a
  `name` and a `price` that is not negative
  (`400 Nama atau harga tidak valid` otherwise).
- `PUT` sets every field of the record from the body and answers
  `{"message": "Data berhasil diperbarui"}`; `DELETE` answers
  `{"message": "Data berhasil dihapus"}`. Neither treats a missing record
  as an error.
- `GET /api/appointments/<id>` returns
  `{"appointment": ..., "pet": ..., "service": ...}`; a pet or service that
  cannot be found is given as an empty record.
- Database errors answer `500` with the error text.

Example:

```
curl -X POST localhost:3000/api/owners/ \
     -H 'Content-Type: application/json' \
     -d '{"name": "Jane Doe", "email": "jane@example.com", "phone": "0000"}'
```

## Seeding sample data

```
petshop-seed [--count N]
```

This adds `N` (default 20) random owners, then `N` pets belonging to
stored owners, the fixed list of five services, and `N` appointments for
stored pets and services dated within the next three months. Existing
records are kept. On success it prints
`Database seeding completed successfully!`.

## Using it as a library

```python
import os

from petshop.app import create_app
from petshop.config import connect_db, get_database, mongo_uri
from petshop.repository import Store

client = connect_db(mongo_uri(os.environ))
store = Store(get_database(client))
app = create_app(store)
```

- `petshop.models` defines the `Owner`, `Pet`, `Service` and `Appointment`
  dataclasses with `to_document`, `to_json`, `from_document` and
  `from_json`, and `parse_object_id`, which raises `InvalidObjectId`.
- `petshop.repository.Store` holds one repository per collection
  (`owners`, `pets`, `services`, `appointments`); each offers `all`, `get`,
  `create`, `update` and `delete`, and `get` raises `NotFoundError` when no
  record matches. `store.owners.exists_by_email(email)` tells whether an
  owner with that address exists.
- `petshop.controllers.create_api(store)` returns the Flask blueprint with
  the routes above, and `petshop.app.create_app(store)` mounts it under
  `/api`.
- `petshop.seed` offers `seed_database` and the individual `seed_*` and
  `generate_*` helpers, each taking an optional `random.Random`.