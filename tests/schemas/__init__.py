"""Wire-format schema tests."""
