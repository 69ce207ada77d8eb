"""Runtime package.

Keep this module dependency-light: importing `live_proxy.runtime.*` from unit
tests should not open sockets or read secrets.
"""

__all__: list[str] = []
