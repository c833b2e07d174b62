from datetime import datetime
from typing import Any, Callable, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel

from shiftsync.core.entities import (
    Message,
    Shift,
    TillVerification,
    TimeEntry,
    User,
    Venue,
    as_utc,
    utcnow,
)

RecordT = TypeVar("RecordT", bound=BaseModel)


def _in_range(value: datetime, start: datetime, end: datetime) -> bool:
    return as_utc(start) <= as_utc(value) <= as_utc(end)


class _Table(Generic[RecordT]):
    """Key-by-id record table with an auto-incrementing primary key."""

    def __init__(self, model: Type[RecordT]) -> None:
        self.model = model
        self.rows: Dict[int, RecordT] = {}
        self.next_id = 1

    def get(self, record_id: int) -> Optional[RecordT]:
        return self.rows.get(record_id)

    def insert(self, data: Dict[str, Any]) -> RecordT:
        record = self.model.model_validate({**data, "id": self.next_id})
        self.rows[record.id] = record  # type: ignore[attr-defined]
        self.next_id += 1
        return record

    def update(self, record_id: int, data: Dict[str, Any]) -> Optional[RecordT]:
        existing = self.rows.get(record_id)
        if existing is None:
            return None
        record = self.model.model_validate(
            {**existing.model_dump(), **data, "id": record_id}
        )
        self.rows[record_id] = record
        return record

    def delete(self, record_id: int) -> bool:
        return self.rows.pop(record_id, None) is not None

    def filter(self, predicate: Callable[[RecordT], bool]) -> List[RecordT]:
        return [row for row in self.rows.values() if predicate(row)]

    def all(self) -> List[RecordT]:
        return list(self.rows.values())


class MemStorage:
    """
    In-memory storage for every ShiftSync record type.

    Operations are async so handlers treat storage as an awaited collaborator,
    but none of them suspend between reading and writing a table.
    """

    def __init__(self) -> None:
        self.users: _Table[User] = _Table(User)
        self.venues: _Table[Venue] = _Table(Venue)
        self.shifts: _Table[Shift] = _Table(Shift)
        self.time_entries: _Table[TimeEntry] = _Table(TimeEntry)
        self.messages: _Table[Message] = _Table(Message)
        self.till_verifications: _Table[TillVerification] = _Table(TillVerification)

    # Users
    async def get_user(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)

    async def get_user_by_username(self, username: str) -> Optional[User]:
        wanted = username.lower()
        matches = self.users.filter(lambda user: user.username.lower() == wanted)
        return matches[0] if matches else None

    async def create_user(self, data: Dict[str, Any]) -> User:
        return self.users.insert(data)

    async def update_user(self, user_id: int, data: Dict[str, Any]) -> Optional[User]:
        return self.users.update(user_id, data)

    async def get_all_users(self) -> List[User]:
        return self.users.all()

    async def get_users_by_role(self, role: str) -> List[User]:
        return self.users.filter(lambda user: user.role == role)

    # Venues
    async def get_venue(self, venue_id: int) -> Optional[Venue]:
        return self.venues.get(venue_id)

    async def create_venue(self, data: Dict[str, Any]) -> Venue:
        return self.venues.insert(data)

    async def update_venue(
        self, venue_id: int, data: Dict[str, Any]
    ) -> Optional[Venue]:
        return self.venues.update(venue_id, data)

    async def delete_venue(self, venue_id: int) -> bool:
        return self.venues.delete(venue_id)

    async def get_all_venues(self) -> List[Venue]:
        return self.venues.all()

    # Shifts
    async def get_shift(self, shift_id: int) -> Optional[Shift]:
        return self.shifts.get(shift_id)

    async def create_shift(self, data: Dict[str, Any]) -> Shift:
        return self.shifts.insert(data)

    async def update_shift(
        self, shift_id: int, data: Dict[str, Any]
    ) -> Optional[Shift]:
        return self.shifts.update(shift_id, data)

    async def delete_shift(self, shift_id: int) -> bool:
        return self.shifts.delete(shift_id)

    async def get_all_shifts(self) -> List[Shift]:
        return self.shifts.all()

    async def get_shifts_by_venue(self, venue_id: int) -> List[Shift]:
        return self.shifts.filter(lambda shift: shift.venueId == venue_id)

    async def get_shifts_by_employee(self, employee_id: int) -> List[Shift]:
        return self.shifts.filter(lambda shift: shift.employeeId == employee_id)

    async def get_shifts_by_date_range(
        self, start_date: datetime, end_date: datetime
    ) -> List[Shift]:
        return self.shifts.filter(
            lambda shift: _in_range(shift.startTime, start_date, end_date)
        )

    # Time entries
    async def get_time_entry(self, entry_id: int) -> Optional[TimeEntry]:
        return self.time_entries.get(entry_id)

    async def create_time_entry(self, data: Dict[str, Any]) -> TimeEntry:
        return self.time_entries.insert(data)

    async def update_time_entry(
        self, entry_id: int, data: Dict[str, Any]
    ) -> Optional[TimeEntry]:
        return self.time_entries.update(entry_id, data)

    async def delete_time_entry(self, entry_id: int) -> bool:
        return self.time_entries.delete(entry_id)

    async def get_all_time_entries(self) -> List[TimeEntry]:
        return self.time_entries.all()

    async def get_time_entries_by_employee(self, employee_id: int) -> List[TimeEntry]:
        return self.time_entries.filter(lambda entry: entry.employeeId == employee_id)

    async def get_time_entries_by_shift(self, shift_id: int) -> List[TimeEntry]:
        return self.time_entries.filter(lambda entry: entry.shiftId == shift_id)

    async def get_time_entries_by_date_range(
        self, start_date: datetime, end_date: datetime
    ) -> List[TimeEntry]:
        return self.time_entries.filter(
            lambda entry: _in_range(entry.clockIn, start_date, end_date)
        )

    # Messages
    async def get_message(self, message_id: int) -> Optional[Message]:
        return self.messages.get(message_id)

    async def create_message(self, data: Dict[str, Any]) -> Message:
        return self.messages.insert({**data, "isRead": False, "sentAt": utcnow()})

    async def update_message(
        self, message_id: int, data: Dict[str, Any]
    ) -> Optional[Message]:
        return self.messages.update(message_id, data)

    async def get_messages_by_user(self, user_id: int) -> List[Message]:
        return self.messages.filter(
            lambda message: message.senderId == user_id
            or message.receiverId == user_id
            or message.receiverId is None
        )

    async def get_unread_messages(self, user_id: int) -> List[Message]:
        return self.messages.filter(
            lambda message: (
                message.receiverId == user_id or message.receiverId is None
            )
            and not message.isRead
        )

    # Till verifications
    async def get_till_verification(
        self, verification_id: int
    ) -> Optional[TillVerification]:
        return self.till_verifications.get(verification_id)

    async def create_till_verification(self, data: Dict[str, Any]) -> TillVerification:
        record = {
            **data,
            "discrepancy": data["actualAmount"] - data["expectedAmount"],
            "verifiedAt": utcnow() if data.get("verifiedBy") else None,
        }
        return self.till_verifications.insert(record)

    async def update_till_verification(
        self, verification_id: int, data: Dict[str, Any]
    ) -> Optional[TillVerification]:
        existing = self.till_verifications.get(verification_id)
        if existing is None:
            return None

        changes = dict(data)
        if "expectedAmount" in changes or "actualAmount" in changes:
            expected = changes.get("expectedAmount", existing.expectedAmount)
            actual = changes.get("actualAmount", existing.actualAmount)
            changes["discrepancy"] = actual - expected

        if changes.get("verifiedBy") is not None and existing.verifiedAt is None:
            changes.setdefault("verifiedAt", utcnow())

        return self.till_verifications.update(verification_id, changes)

    async def delete_till_verification(self, verification_id: int) -> bool:
        return self.till_verifications.delete(verification_id)

    async def get_all_till_verifications(self) -> List[TillVerification]:
        return self.till_verifications.all()

    async def get_till_verifications_by_shift(
        self, shift_id: int
    ) -> List[TillVerification]:
        return self.till_verifications.filter(
            lambda verification: verification.shiftId == shift_id
        )

    async def get_till_verifications_by_employee(
        self, employee_id: int
    ) -> List[TillVerification]:
        return self.till_verifications.filter(
            lambda verification: verification.employeeId == employee_id
        )

    async def get_till_verifications_by_date_range(
        self, start_date: datetime, end_date: datetime
    ) -> List[TillVerification]:
        return self.till_verifications.filter(
            lambda verification: _in_range(verification.createdAt, start_date, end_date)
        )
