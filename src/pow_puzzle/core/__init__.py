"""Core primitives shared by the value types and entities."""
