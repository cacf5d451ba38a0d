"""Summarise command output into head, tail and matched lines, with stored captures."""

__version__ = "0.1.0"