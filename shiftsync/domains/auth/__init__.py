"""Authentication domain: registration, login and bearer-token resolution."""
