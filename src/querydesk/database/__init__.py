"""Database layer - connection adapters, sessions and delimiter state."""
