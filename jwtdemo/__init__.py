"""jwtdemo - username/password login with short-lived JWT bearer tokens."""

__version__ = "0.1.0"
