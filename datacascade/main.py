import logging

from fastapi import FastAPI

from datacascade.api.data import router as data_router
from datacascade.core.dependencies import get_template_data
from datacascade.domain.errors import CascadeError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


app = FastAPI(
    title="Data Cascade Inspector",
    version="0.1.0",
    description="Resolves the global and per-file data cascade of a static site build.",
)


@app.on_event("startup")
async def startup_event() -> None:
    """
    Build the global data cache so the first request does not pay for it.
    """
    try:
        await get_template_data().cache_data()
    except CascadeError as e:
        # Served as 500s from the data routes until the data is fixed.
        logger.error(f"Initial data build failed: {e}")


@app.get("/health")
async def health() -> dict:
    """
    Lightweight health check endpoint.
    """
    return {"status": "ok"}


app.include_router(data_router, prefix="/data", tags=["data"])


if __name__ == "__main__":
    """
    Allow running `python datacascade/main.py` to start the Uvicorn development server.
    """
    import uvicorn

    uvicorn.run(
        "datacascade.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
