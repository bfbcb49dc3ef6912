import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from domain.exceptions.rate import UnsupportedStablecoinError

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
	@app.exception_handler(UnsupportedStablecoinError)
	async def unsupported_stablecoin_handler(request: Request, exc: UnsupportedStablecoinError):
		logger.info(f'Rejected rates request: {exc}')
		return JSONResponse(status_code=400, content={'detail': str(exc)})
