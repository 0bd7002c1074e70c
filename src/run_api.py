"""Run the FastAPI server."""

import multiprocessing

import uvicorn

from config import settings

if __name__ == "__main__":
    # Workers share the uploads directory; writes are serialized by per-dataset file locks
    num_cores = multiprocessing.cpu_count()
    num_workers = (2 * num_cores) + 1

    uvicorn.run(
        "api.main:app",
        host=settings.host,
        port=settings.port,
        workers=num_workers,
    )
