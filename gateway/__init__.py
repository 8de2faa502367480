"""Worklog gateway: forwards front-end API calls to the worklog backend."""

__version__ = "0.1.0"
