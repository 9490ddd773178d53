from __future__ import annotations

import sys

import uvicorn

from retail_core.adapters.inbound.cli import run_demo, run_script
from retail_core.bootstrap import build_service
from retail_core.config import settings
from retail_core.logging import configure_logging

USAGE = "usage: retail-core [demo | script '<json>' | serve]"


def main(argv: list[str] | None = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    command = argv[0] if argv else "demo"
    configure_logging(settings.log_level)

    if command == "demo":
        return run_demo(build_service(settings, seed=True))

    if command == "script":
        if len(argv) < 2:
            print(USAGE)
            return 2
        return run_script(build_service(settings, seed=True), argv[1])

    if command == "serve":
        uvicorn.run(
            "retail_core.asgi:create_asgi_app",
            factory=True,
            host=settings.host,
            port=settings.port,
            reload=False,
        )
        return 0

    print(USAGE)
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
