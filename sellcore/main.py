from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sellcore.db import Base, engine
from sellcore.errors import ListingError
from sellcore.api.routes import router as api_router
from sellcore import scheduler
from sellcore.utils import logger
import sellcore.models  # noqa: F401 ensure models are imported so tables are known

# create FastAPI instance
app = FastAPI(title="sellcore")
app.include_router(api_router)


@app.exception_handler(ListingError)
async def listing_error_handler(request: Request, exc: ListingError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.on_event("startup")
def on_startup():
    # Ensure database tables are created on startup
    try:
        Base.metadata.create_all(bind=engine)
    except Exception as e:
        # Do not crash the app if migrations are preferred; keep running
        logger.warning("Table creation skipped/failed: %s", e)
    scheduler.start()


@app.on_event("shutdown")
def on_shutdown():
    scheduler.shutdown()
