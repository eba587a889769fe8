"""REST client and command-line tests."""
