"""Core combat model: value types and the event bus."""
