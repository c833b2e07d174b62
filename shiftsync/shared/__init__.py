"""Shared utilities and cross-domain components.

This module contains utilities used across multiple domains:
- Exception classes for consistent error handling
- Permission system for role, permission and venue scoped access control
- Parsing helpers for query string filters
"""
