"""Staff accounts and role or access management."""
