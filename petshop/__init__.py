"""Pet shop backend: owners, pets, services and appointments in MongoDB over a JSON API."""

__version__ = "0.1.0"