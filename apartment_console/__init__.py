"""
Apartment ownership console.

Async client and terminal console for the apartments / users / shares
("udzialy") REST API.
"""

__version__ = "0.1.0"
