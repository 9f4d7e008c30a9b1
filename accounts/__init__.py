"""Account identity and credential core."""
