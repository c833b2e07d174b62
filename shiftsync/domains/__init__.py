"""Business domains of the ShiftSync API, one package per resource."""
