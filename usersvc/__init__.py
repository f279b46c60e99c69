"""Domain core of a user, staff and role directory service: models, services, config, events and health."""

__version__ = "0.1.0"