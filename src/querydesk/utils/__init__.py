"""Utilities - SQL text splitting."""
