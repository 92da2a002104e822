"""SchoolHub - multi-role school management API."""
__version__ = "1.0.0"
