"""Source header checking.

Validates the leading comment of source files against a header template
and regenerates it when it is missing, misplaced or out of date.
"""

__version__ = "0.1.0"
