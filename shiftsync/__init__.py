"""ShiftSync staff-scheduling API."""
