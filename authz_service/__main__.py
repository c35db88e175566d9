from __future__ import annotations

import uvicorn

from authz_service.core.config import SETTINGS


def main() -> None:
    # Import string (not the app object) so uvicorn can spawn workers
    uvicorn.run(
        "authz_service.main:app",
        host=SETTINGS.host,
        port=SETTINGS.port,
        workers=SETTINGS.workers,
        log_config=None,
    )


if __name__ == "__main__":
    main()
