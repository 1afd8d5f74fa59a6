"""Run the API server: ``python -m hotel_desk``."""

import uvicorn

from hotel_desk.config import settings

if __name__ == "__main__":
    uvicorn.run("hotel_desk.main:app", host=settings.host, port=settings.port, reload=settings.debug)
