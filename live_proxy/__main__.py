"""Run the proxy: `python -m live_proxy`."""

from __future__ import annotations

import uvicorn

from live_proxy.runtime.settings import load_settings


def main() -> None:
    settings = load_settings()
    uvicorn.run(
        "live_proxy.server:app",
        host=settings.server.host,
        port=settings.server.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
