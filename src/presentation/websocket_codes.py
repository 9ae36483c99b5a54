"""
Codes for countdown WebSocket messages between client and server.
"""

from enum import Enum


class WebSocketCode(str, Enum):
    """Codes for countdown WebSocket messages."""

    # Client to server
    REFRESH = 'REFRESH'  # Client asks for a fresh dashboard (pull to refresh)

    # Server to client
    COUNTDOWN_TICK = 'COUNTDOWN_TICK'  # Remaining time for every active draw
    COUNTDOWN_IDLE = 'COUNTDOWN_IDLE'  # No active draws, ticker released
    DRAWS_UPDATED = 'DRAWS_UPDATED'  # Snapshot replaced after a refresh

    # Errors
    ERROR = 'ERROR'

    # System
    CONNECTION_ESTABLISHED = 'CONNECTION_ESTABLISHED'
