"""
ContactBook — FastAPI Backend
=============================
HTTP surface over the contact store:
  - Browse contacts   (search + alphabetical sections + pinned profile)
  - Contacts CRUD     (ContactStore)
  - My profile        (read / edit, never deletable)

Start:
    uvicorn main_api:app --reload --port 8000

Interactive docs:
    http://localhost:8000/docs
"""

import logging
import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

from fastapi import Depends, FastAPI, Header, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from contactbook.domain import errors
from contactbook.domain.entities.contact import PROFILE_ID, Contact, ContactDraft
from contactbook.use_cases.browse_contacts import BrowseContactsRequest

logging.basicConfig(level=logging.INFO, format="%(levelname)s  %(name)s: %(message)s")
logger = logging.getLogger(__name__)

# ── App ───────────────────────────────────────────────────────────────────────

app = FastAPI(title="ContactBook API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Dependency-injection container (initialised at startup) ───────────────────

_container = None
_startup_error: Optional[str] = None


@app.on_event("startup")
async def startup():
    global _container, _startup_error
    _container = None
    _startup_error = None
    try:
        from contactbook.infrastructure.config import Config
        from contactbook.infrastructure.container import Container

        container = Container(Config.from_env())
        await container.contact_store.load()
        _container = container
        logger.info("Container initialised successfully.")
    except Exception as e:
        _startup_error = str(e)
        logger.error(f"Container startup failed: {e}")


@app.on_event("shutdown")
async def shutdown():
    if _container is not None:
        await _container.contact_store.flush()


def get_container():
    if _startup_error:
        raise HTTPException(status_code=503, detail=f"Service misconfigured: {_startup_error}")
    if _container is None:
        raise HTTPException(status_code=503, detail="Service not ready.")
    return _container


# ── Auth ──────────────────────────────────────────────────────────────────────


def _auth(x_api_key: str = Header(...)) -> None:
    if x_api_key != os.getenv("API_KEY", "dev-key"):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")


# ── Domain errors → HTTP ──────────────────────────────────────────────────────


@app.exception_handler(errors.ValidationError)
async def _validation_error(request: Request, exc: errors.ValidationError):
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc), "fields": exc.fields},
    )


@app.exception_handler(errors.NotFoundError)
async def _not_found(request: Request, exc: errors.NotFoundError):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


@app.exception_handler(errors.ForbiddenOperationError)
async def _forbidden(request: Request, exc: errors.ForbiddenOperationError):
    return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content={"detail": str(exc)})


# ── Request / Response models ─────────────────────────────────────────────────


class ContactIn(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    title: Optional[str] = None
    avatar: Optional[str] = None

    def to_draft(self) -> ContactDraft:
        return ContactDraft(
            name=self.name,
            phone=self.phone,
            email=self.email,
            title=self.title,
            avatar=self.avatar,
        )


def _contact_out(contact: Contact) -> dict:
    row = contact.to_dict()
    row["display_title"] = contact.display_title
    row["links"] = {
        "call": contact.tel_url(),
        "sms": contact.sms_url(),
        "email": contact.mailto_url(),
    }
    return row


# ── Health ────────────────────────────────────────────────────────────────────


@app.get("/health", tags=["meta"])
async def health():
    persistence_error = None
    if _container is not None and _container.contact_store.last_persistence_error:
        persistence_error = str(_container.contact_store.last_persistence_error)
    return {"status": "ok", "error": _startup_error, "persistence_error": persistence_error}


# ── Contacts ──────────────────────────────────────────────────────────────────


@app.get("/contacts", tags=["contacts"])
async def browse_contacts(q: str = "", _: None = Depends(_auth)):
    """Profile header plus contacts matching q, grouped by leading letter."""
    c = get_container()
    response = c.browse_use_case.execute(BrowseContactsRequest(query=q))
    return {
        "profile": _contact_out(response.profile) if response.profile else None,
        "sections": [
            {"title": s.title, "data": [_contact_out(m) for m in s.members]}
            for s in response.sections
        ],
        "section_titles": response.section_titles,
        "total": response.total,
        "matched": response.matched,
    }


@app.get("/contacts/{contact_id}", tags=["contacts"])
async def get_contact(contact_id: str, _: None = Depends(_auth)):
    c = get_container()
    return _contact_out(c.contact_store.get(contact_id))


@app.post("/contacts", status_code=status.HTTP_201_CREATED, tags=["contacts"])
async def create_contact(body: ContactIn, _: None = Depends(_auth)):
    """Add a new contact. The server assigns the id and default avatar."""
    c = get_container()
    return _contact_out(c.contact_store.create(body.to_draft()))


@app.put("/contacts/{contact_id}", tags=["contacts"])
async def update_contact(contact_id: str, body: ContactIn, _: None = Depends(_auth)):
    """Replace the editable fields of an existing contact."""
    c = get_container()
    return _contact_out(c.contact_store.update(contact_id, body.to_draft()))


@app.delete("/contacts/{contact_id}", status_code=status.HTTP_204_NO_CONTENT, tags=["contacts"])
async def delete_contact(contact_id: str, _: None = Depends(_auth)):
    c = get_container()
    c.contact_store.delete(contact_id)


# ── My profile ────────────────────────────────────────────────────────────────


@app.get("/profile", tags=["profile"])
async def get_profile(_: None = Depends(_auth)):
    c = get_container()
    return _contact_out(c.contact_store.get(PROFILE_ID))


@app.put("/profile", tags=["profile"])
async def update_profile(body: ContactIn, _: None = Depends(_auth)):
    c = get_container()
    return _contact_out(c.contact_store.update(PROFILE_ID, body.to_draft()))
