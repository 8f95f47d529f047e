"""Shared test fixtures for Scout."""
