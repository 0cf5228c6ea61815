"""Candidate interview-availability service for the careers platform."""

__version__ = "0.1.0"
