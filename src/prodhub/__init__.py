"""Productivity Hub — personal productivity backend.

Tasks, notes, calendar events, goals, mood entries, focus-timer sessions
and assistant chat history, each owned by exactly one authenticated user.
"""

__version__ = "0.1.0"
