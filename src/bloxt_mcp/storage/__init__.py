"""Settings and session storage."""
