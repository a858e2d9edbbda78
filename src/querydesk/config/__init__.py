"""Configuration - persistent user preferences."""
