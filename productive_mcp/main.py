import logging
import os

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .errors import InvalidInputShape, TimesheetError
from .handlers import routers
from .tools import by_name, schemas

logger = logging.getLogger(__name__)


def _describe_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        field = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        parts.append(f"{field}: {error.get('msg')}" if field else error.get("msg", ""))
    return "Invalid parameters: " + ", ".join(parts)


def create_app() -> FastAPI:
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(level=level)
    logging.getLogger("productive_mcp").setLevel(level)

    app = FastAPI(title="Productive MCP")

    for router in routers:
        app.include_router(router)

    @app.exception_handler(TimesheetError)
    async def timesheet_error(request: Request, exc: TimesheetError):
        logger.info("%s on %s: %s", exc.kind, request.url.path, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content={"status": "error", "error": exc.kind, "detail": exc.message},
        )

    @app.exception_handler(RequestValidationError)
    async def invalid_input(request: Request, exc: RequestValidationError):
        return await timesheet_error(request, InvalidInputShape(_describe_validation_error(exc)))

    @app.get("/tools")
    async def list_tools():
        return {"tools": schemas}

    @app.get("/tools/{name}")
    async def get_tool(name: str):
        if name not in by_name:
            raise HTTPException(404, f"Unknown tool: {name}")
        return by_name[name]

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
