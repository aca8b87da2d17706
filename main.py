import os

import uvicorn
from dotenv import load_dotenv

load_dotenv()

from app.api.server import create_app  # noqa: E402

app = create_app()


def main() -> None:
    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


if __name__ == "__main__":
    main()
