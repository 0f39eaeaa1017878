"""Utilities shared by the record types, the I/O tools and the validator."""
