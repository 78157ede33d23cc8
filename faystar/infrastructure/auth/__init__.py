"""Inbound authentication primitives: password hashing and bearer tokens."""
