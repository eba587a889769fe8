"""Test suite for cats_api."""
