"""
Utility functions for Nixdorf 8820 disk image utilities.
"""

import re

from .models import DirectoryEntry


def has_wildcards(pattern: str) -> bool:
    """Check if a string contains wildcard characters."""
    return '*' in pattern or '?' in pattern


def match_filename(pattern: str, filename: str) -> bool:
    """
    Match a wildcard pattern against a directory name.
    Supports * (any characters) and ? (single character).
    """
    regex = ''
    for char in pattern.upper():
        if char == '*':
            regex += '.*'
        elif char == '?':
            regex += '.'
        else:
            regex += re.escape(char)

    return re.fullmatch(regex, filename.upper()) is not None


def match_entries(entries: list[DirectoryEntry], pattern: str) -> list[DirectoryEntry]:
    """
    Filter directory entries by name or wildcard pattern, keeping disk order.
    Without wildcards only the first entry with that exact name is returned.
    """
    if not has_wildcards(pattern):
        name = pattern.strip()
        for entry in entries:
            if entry.name == name:
                return [entry]
        return []

    return [e for e in entries if match_filename(pattern, e.name)]


def safe_filename(name: str) -> str:
    """Host file name for a directory name."""
    cleaned = re.sub(r'[\\/:*?"<>|\x00-\x1f\x7f]', '_', name.strip())
    return cleaned or '_'
