import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .db import DatastoreConfigError, init_schema
from .settings import settings
from .routers import gemini
from .routers import problem

logging.basicConfig(
	level=settings.log_level.upper(),
	format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Math Problem Generator API")
app.include_router(problem.router)
app.include_router(gemini.router)

@app.get("/info")
def root():
	return {"status": "ok", "gemini_configured": bool(settings.gemini_api_key)}

def _jsonable_errors(exc: RequestValidationError):
	# ctx may carry exception objects that are not JSON serializable
	return [{k: v for k, v in err.items() if k != "ctx"} for err in exc.errors()]

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
	logger.info("rejected %s %s: %s", request.method, request.url.path, exc.errors())
	return JSONResponse(
		status_code=status.HTTP_400_BAD_REQUEST,
		content={"detail": _jsonable_errors(exc)},
	)

@app.exception_handler(DatastoreConfigError)
async def datastore_config_handler(request: Request, exc: DatastoreConfigError):
	logger.error("datastore not configured: %s", exc)
	return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": str(exc)})

@app.on_event("startup")
async def startup_event():
	# Create tables; fails fast when DATABASE_URL is missing
	init_schema()
