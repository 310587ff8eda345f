"""Agent dashboard for the lead intake API."""
