"""Core configuration, enums and exceptions."""
