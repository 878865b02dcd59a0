"""HubSearch — search and ranking engine for the community/mentoring platform."""

__version__ = "0.1.0"
