"""Core configuration and wiring helpers."""
