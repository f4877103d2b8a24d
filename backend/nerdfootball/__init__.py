"""NerdFootball confidence and survivor pool scoring."""

__version__ = "0.1.0"
