from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv

from gatewayctl import __version__
from gatewayctl.api.middleware import RequestLoggingMiddleware
from gatewayctl.api.routes import gateway, health, kubernetes
from gatewayctl.logging import setup_logger
from gatewayctl.modules.errors import ErrorKind, GatewayCtlError

load_dotenv()
logger = setup_logger("gatewayctl.api")

STATUS_CODES = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.MALFORMED_RESPONSE: 502,
    ErrorKind.TOOL_NOT_FOUND: 503,
    ErrorKind.TIMEOUT: 504,
    ErrorKind.NON_ZERO_EXIT: 500,
    ErrorKind.IO_ERROR: 500,
}

app = FastAPI(title="gatewayctl", version=__version__)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(GatewayCtlError)
async def gatewayctl_error_handler(request: Request, exc: GatewayCtlError):
    status_code = STATUS_CODES.get(exc.kind, 500)
    logger.error(f"{request.method} {request.url.path} failed ({exc.kind.value}): {exc.message}")
    return JSONResponse(status_code=status_code, content=exc.to_dict())


app.include_router(health.router)
app.include_router(kubernetes.router)
app.include_router(gateway.router)
