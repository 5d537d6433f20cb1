"""Constants shared by the key-path engine and the JSON driver."""

KEY_PATH_SEPARATOR = "."
"""Separator between segments in a textual key path. There is no escaping."""

PRETTY_INDENT = 2
"""Indentation width for pretty-printed output."""

PRETTY_SEPARATORS = (",", " : ")
"""Item and key separators for pretty-printed output."""

COMPACT_SEPARATORS = (",", ":")
"""Item and key separators for compact output."""
