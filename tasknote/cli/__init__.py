"""Command-line interface for tasknote."""
