"""Run the server: ``python -m fileshare``."""
import uvicorn

from fileshare.config import settings


def main():
    uvicorn.run("fileshare.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
