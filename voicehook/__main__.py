"""Run the webhook server: ``python -m voicehook``."""

import uvicorn

from voicehook.api.dependencies import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "voicehook.api.app:app",
        host=settings.api.host,
        port=settings.api.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
