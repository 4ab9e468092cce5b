"""
Tests for authentication app.

This package contains test modules for:
- test_models.py: User model tests (display identity, push device fields)
- test_managers.py: UserManager tests

Usage:
    pytest authentication/tests/
"""
