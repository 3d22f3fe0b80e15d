import logging

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from portal.core import config
from portal.database import Base, SessionLocal, engine, ensure_storage_location
from portal.errors import InvalidInput, PortalError, Unauthenticated
from portal.models import selection, tool, user
from portal.routes import admin_routes, auth_routes, dashboard_routes
from portal.seed import seed_demo_data

app = FastAPI(title='Tool Portal')

logger = logging.getLogger(__name__)

STORAGE_UNAVAILABLE = 'Storage unavailable. Please try again.'


@app.on_event('startup')
def initialize_database() -> None:
    config.validate_runtime_config()
    try:
        ensure_storage_location()
        Base.metadata.create_all(bind=engine, tables=[user.User.__table__, tool.Tool.__table__, selection.Selection.__table__])
        if config.SEED_DEMO_DATA:
            db = SessionLocal()
            try:
                seed_demo_data(db)
            finally:
                db.close()
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL.')


@app.exception_handler(Unauthenticated)
def handle_unauthenticated(request: Request, exc: Unauthenticated):
    return RedirectResponse(url='/', status_code=status.HTTP_303_SEE_OTHER)


@app.exception_handler(InvalidInput)
def handle_invalid_input(request: Request, exc: InvalidInput):
    return JSONResponse(status_code=exc.status_code, content={'detail': exc.message, 'fields': exc.fields})


@app.exception_handler(PortalError)
def handle_portal_error(request: Request, exc: PortalError):
    return JSONResponse(status_code=exc.status_code, content={'detail': exc.message})


@app.exception_handler(SQLAlchemyError)
def handle_storage_error(request: Request, exc: SQLAlchemyError):
    logger.exception('Storage failure while handling %s %s.', request.method, request.url.path)
    return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={'detail': STORAGE_UNAVAILABLE})


@app.exception_handler(StarletteHTTPException)
def handle_http_error(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return JSONResponse(status_code=exc.status_code, content={'detail': 'Page not found.'})
    return JSONResponse(status_code=exc.status_code, content={'detail': exc.detail}, headers=exc.headers)


app.include_router(auth_routes.router)
app.include_router(dashboard_routes.router)
app.include_router(admin_routes.router)


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    uvicorn.run(app, host=config.HOST, port=config.PORT)
