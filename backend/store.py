"""
In-memory session store shared across all routes.
Sessions (and the API key each one owns) live in a plain dict — nothing is persisted.
"""

from models.session import ChatSession

sessions: dict[str, ChatSession] = {}
