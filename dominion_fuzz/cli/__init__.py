"""Command-line interface for the Dominion random tests."""
