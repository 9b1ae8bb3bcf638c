"""Command-line interface for finchat."""
