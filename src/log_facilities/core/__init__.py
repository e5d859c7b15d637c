"""Core logging types, file I/O and facilities."""
