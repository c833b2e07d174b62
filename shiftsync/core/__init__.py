"""Core application components.

This module provides the foundational components for the ShiftSync API:
- In-memory storage for users, venues, shifts and till records
- Application settings and configuration
- Stored entity types and enumerations shared across domains
"""
