import uvicorn

from app.config import settings

def main() -> None:
    uvicorn.run("app.main:app", host=settings.app_host, port=settings.app_port)

if __name__ == "__main__":
    main()
