"""Configuration constants (env names, defaults and protocol values only).

Nothing here reads secrets at import time; `live_proxy.runtime.settings`
resolves the environment into typed settings.
"""

__all__: list[str] = []
