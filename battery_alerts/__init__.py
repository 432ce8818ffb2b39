"""Stale lock battery alerts and campaign engagement analytics."""
