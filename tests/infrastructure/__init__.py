"""Adapter and logging tests."""
