"""Users API.

HTTP/JSON resource service for managing ``User`` records on top of a
relational store.
"""

__version__ = "0.1.0"
