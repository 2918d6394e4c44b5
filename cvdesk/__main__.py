import uvicorn

from cvdesk.config import Settings


def main() -> None:
    settings = Settings()
    uvicorn.run("cvdesk.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
