import os

import uvicorn

from movieproxy.core.app import app  # noqa: F401
from movieproxy.core.config import settings

if __name__ == "__main__":
    PORT = os.getenv("PORT", settings.PORT)
    reload = settings.APP_ENV == "development"
    uvicorn.run("movieproxy.core.app:app", host="0.0.0.0", port=int(PORT), reload=reload)
