import logging
import time
from typing import List, Optional

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import Settings
from models import Contact, ContactIn, Message
from store import ContactStore

log = logging.getLogger(__name__)

NOT_FOUND = "Contact not found"

router = APIRouter()


def get_store(request: Request) -> ContactStore:
    return request.app.state.store


def create_app(settings: Optional[Settings] = None, store: Optional[ContactStore] = None) -> FastAPI:
    """Build the API around its own store.

    Each call gets a fresh ``ContactStore`` unless one is passed in.
    """
    settings = settings or Settings.from_env()

    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s | %(levelname)-8s | %(message)s',
    )
    # basicConfig is a no-op once root has handlers
    logging.getLogger().setLevel(settings.log_level)

    app = FastAPI(title="Contact Manager API")
    app.state.store = store if store is not None else ContactStore()

    if settings.frontend_urls:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.frontend_urls,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = (time.perf_counter() - start) * 1000
        log.info("%s %s %d %.3f ms", request.method, request.url.path, response.status_code, elapsed)
        return response

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        log.debug("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"message": "Invalid request"})

    app.include_router(router)
    return app


@router.get("/", response_model=Message)
def root():
    return {"message": "Backend Deployed Successfully"}


@router.post("/contacts", response_model=Contact, status_code=201)
def create_contact(contact: Optional[ContactIn] = None, store: ContactStore = Depends(get_store)):
    if contact is None or not (contact.name and contact.email and contact.phone):
        raise HTTPException(status_code=400, detail="All fields are required")
    return store.create(contact.name, contact.email, contact.phone)


@router.get("/contacts", response_model=List[Contact])
def read_contacts(store: ContactStore = Depends(get_store)):
    return store.list()


@router.get("/contacts/{contact_id}", response_model=Contact)
def read_contact(contact_id: int, store: ContactStore = Depends(get_store)):
    contact = store.find_by_id(contact_id)
    if contact is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return contact


@router.put("/contacts/{contact_id}", response_model=Contact)
def update_contact(contact_id: int, updated_contact: Optional[ContactIn] = None,
                   store: ContactStore = Depends(get_store)):
    contact = store.update(contact_id, updated_contact or ContactIn())
    if contact is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return contact


@router.delete("/contacts/{contact_id}", response_model=Message)
def delete_contact(contact_id: int, store: ContactStore = Depends(get_store)):
    if not store.delete(contact_id):
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return {"message": "Contact deleted"}


app = create_app()

if __name__ == "__main__":
    settings = Settings.from_env()
    uvicorn.run(app, host=settings.host, port=settings.port)
