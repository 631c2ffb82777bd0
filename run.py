import uvicorn

from eduhub.config import settings
from eduhub.main import create_app

app = create_app(create_tables=True)

if __name__ == "__main__":
    uvicorn.run(app, host="127.0.0.1", port=8000, log_level=settings.LOG_LEVEL.lower())
