"""Tests for toolkit services."""
