"""dialcheck - syntax validator for Asterisk dialplan files."""

__version__ = "0.1.0"
