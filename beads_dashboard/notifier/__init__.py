"""
Change Notifier: file system watch plus WebSocket refresh broadcast.
"""

from .broadcaster import REFRESH_MESSAGE, RefreshBroadcaster
from .watcher import ChangeNotifier

__all__ = ["ChangeNotifier", "RefreshBroadcaster", "REFRESH_MESSAGE"]
