"""Qt integration - editor source, result bridge and background worker."""
