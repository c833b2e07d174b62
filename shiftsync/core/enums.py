from enum import Enum


class UserRole(str, Enum):
    SUPER_ADMIN = "super_admin"  # Owner with all privileges
    ADMIN = "admin"  # Administrator with management privileges
    MANAGER = "manager"  # Venue manager with limited admin privileges
    SUPERVISOR = "supervisor"  # Shift supervisor with authority over employees
    EMPLOYEE = "employee"  # Regular staff member
    IT = "it"  # IT support with system-level access


class ShiftStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Permission(str, Enum):
    """
    Defines all permissions available in the system.

    Permissions follow the pattern: ACTION_SCOPE_RESOURCE
    Common actions: VIEW, MANAGE, SEND
    """

    # User management
    MANAGE_USERS = "manage_users"  # Create, update, delete users
    VIEW_ALL_USERS = "view_all_users"  # View all user profiles

    # Venue management
    MANAGE_VENUES = "manage_venues"  # Create, update, delete venues
    VIEW_ALL_VENUES = "view_all_venues"  # View all venues

    # Shift management
    MANAGE_ALL_SHIFTS = "manage_all_shifts"  # Manage shifts for all venues
    MANAGE_VENUE_SHIFTS = "manage_venue_shifts"  # Manage shifts for assigned venues
    VIEW_ALL_SHIFTS = "view_all_shifts"  # View all shifts

    # Time entries
    MANAGE_ALL_TIME = "manage_all_time"  # Manage time entries for all employees
    MANAGE_VENUE_TIME = "manage_venue_time"  # Manage time at assigned venues
    VIEW_ALL_TIME = "view_all_time"  # View all time entries

    # Messaging
    SEND_MASS_MESSAGES = "send_mass_messages"  # Broadcast to every user

    # Till verification
    MANAGE_ALL_TILLS = "manage_all_tills"  # Manage till verifications for all venues
    MANAGE_VENUE_TILLS = "manage_venue_tills"  # Manage tills for assigned venues
    VIEW_ALL_TILLS = "view_all_tills"  # View all till verifications

    # System
    SYSTEM_SETTINGS = "system_settings"  # Access to system-wide settings
