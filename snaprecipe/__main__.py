"""Run the API with uvicorn: ``python -m snaprecipe``."""

import uvicorn

from snaprecipe.config import settings

if __name__ == "__main__":
    uvicorn.run("snaprecipe.main:app", host=settings.host, port=settings.port, log_config=None)
