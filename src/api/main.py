"""
FastAPI backend: REST API over JackutService.
Run with uvicorn: uvicorn api.main:app --reload
"""

import logging
from pathlib import Path

from dotenv import load_dotenv

# Load .env from repo root (when run from repo root or from Docker)
for path in (
    Path(__file__).resolve().parent.parent.parent / ".env",
    Path.cwd() / ".env",
):
    if path.exists():
        load_dotenv(path)
        break

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Header, Request
from fastapi.responses import JSONResponse
from neo4j import GraphDatabase
from pydantic import BaseModel

from api.config import STORAGE_FILE, STORAGE_NEO4J, Settings
from api.formatting import format_list
from jackut.application import JackutService
from jackut.domain import ErrorKind, JackutError
from jackut.infrastructure import (
    InMemoryCommunityRepository,
    InMemoryUserRepository,
    JsonFileCommunityRepository,
    JsonFileUserRepository,
    Neo4jCommunityRepository,
    Neo4jUserRepository,
    ensure_jackut_constraints,
)

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)
logger = logging.getLogger(__name__)

SESSION_HEADER = "X-Session-Id"

ERROR_STATUS = {
    ErrorKind.INVALID_IDENTIFIER: 400,
    ErrorKind.INVALID_CREDENTIAL: 400,
    ErrorKind.INVALID_ATTRIBUTE: 400,
    ErrorKind.SELF_RELATIONSHIP: 400,
    ErrorKind.BAD_CREDENTIALS: 401,
    ErrorKind.USER_NOT_FOUND: 404,
    ErrorKind.COMMUNITY_NOT_FOUND: 404,
    ErrorKind.ATTRIBUTE_NOT_SET: 404,
    ErrorKind.EMPTY_QUEUE: 404,
    ErrorKind.DUPLICATE_ACCOUNT: 409,
    ErrorKind.DUPLICATE_COMMUNITY: 409,
    ErrorKind.ALREADY_ADDED: 409,
    ErrorKind.ALREADY_FRIENDS: 409,
    ErrorKind.ALREADY_MEMBER: 409,
    ErrorKind.FRIEND_REQUEST_PENDING: 409,
    ErrorKind.NOT_FRIENDS: 409,
    ErrorKind.ENEMY_BLOCKED: 409,
}


def build_service(settings: Settings) -> tuple[JackutService, object | None]:
    """Return the service for the configured storage and the Neo4j driver when one is opened."""
    if settings.storage == STORAGE_NEO4J:
        driver = GraphDatabase.driver(
            settings.neo4j_uri, auth=(settings.neo4j_user, settings.neo4j_password)
        )
        ensure_jackut_constraints(driver)
        service = JackutService(Neo4jUserRepository(driver), Neo4jCommunityRepository(driver))
        return service, driver
    if settings.storage == STORAGE_FILE:
        service = JackutService(
            JsonFileUserRepository(settings.data_dir),
            JsonFileCommunityRepository(settings.data_dir),
        )
        return service, None
    return JackutService(InMemoryUserRepository(), InMemoryCommunityRepository()), None


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.service = None
    app.state.driver = None
    settings = Settings.from_env()
    logger.info("Jackut storage: %s", settings.storage)
    if settings.storage == STORAGE_FILE:
        logger.info("Snapshots in %s", settings.data_dir.resolve())
    try:
        app.state.service, app.state.driver = build_service(settings)
        yield
    finally:
        if app.state.service is not None:
            app.state.service.shutdown()
        if app.state.driver is not None:
            app.state.driver.close()


app = FastAPI(title="Jackut API", lifespan=lifespan)


def get_service(request: Request) -> JackutService:
    return request.app.state.service


@app.exception_handler(JackutError)
async def jackut_error_handler(request: Request, exc: JackutError):
    return JSONResponse(
        status_code=ERROR_STATUS.get(exc.kind, 400),
        content={"detail": str(exc), "kind": exc.kind.name},
    )


# --- request / response bodies ---


class RegisterBody(BaseModel):
    name: str | None = None
    password: str | None = None
    login: str | None = None


class SessionBody(BaseModel):
    login: str | None = None
    password: str | None = None


class AttributeBody(BaseModel):
    value: str


class NoteBody(BaseModel):
    recipient: str
    text: str


class CommunityBody(BaseModel):
    name: str
    description: str = ""


class MessageBody(BaseModel):
    text: str


def _list_response(items: list[str]) -> dict:
    return {"items": items, "display": format_list(items)}


# --- REST: health ---


@app.get("/health")
def health():
    return {"status": "ok"}


# --- REST: accounts and sessions ---


@app.post("/reset", status_code=204)
def reset(service: JackutService = Depends(get_service)):
    service.reset_all()


@app.post("/users", status_code=201)
def register_user(body: RegisterBody, service: JackutService = Depends(get_service)):
    service.register_user(body.name, body.password, body.login)
    return {"login": body.login}


@app.post("/sessions", status_code=201)
def open_session(body: SessionBody, service: JackutService = Depends(get_service)):
    return {"session_id": service.open_session(body.login, body.password)}


@app.delete("/sessions", status_code=204)
def close_session(
    x_session_id: str | None = Header(None, alias=SESSION_HEADER),
    service: JackutService = Depends(get_service),
):
    service.close_session(x_session_id)


@app.delete("/users/me", status_code=204)
def delete_user(
    x_session_id: str | None = Header(None, alias=SESSION_HEADER),
    service: JackutService = Depends(get_service),
):
    service.delete_user(x_session_id)


# --- REST: profile ---


@app.get("/users/{login}/attributes/{attribute}")
def get_attribute(login: str, attribute: str, service: JackutService = Depends(get_service)):
    return {"value": service.get_attribute(login, attribute)}


@app.put("/users/me/attributes/{attribute}", status_code=204)
def set_attribute(
    attribute: str,
    body: AttributeBody,
    x_session_id: str | None = Header(None, alias=SESSION_HEADER),
    service: JackutService = Depends(get_service),
):
    service.set_attribute(x_session_id, attribute, body.value)


# --- REST: friends ---


@app.post("/friends/{login}")
def request_friend(
    login: str,
    x_session_id: str | None = Header(None, alias=SESSION_HEADER),
    service: JackutService = Depends(get_service),
):
    return {"confirmed": service.request_friend(x_session_id, login)}


@app.delete("/friends/{login}", status_code=204)
def remove_friend(
    login: str,
    x_session_id: str | None = Header(None, alias=SESSION_HEADER),
    service: JackutService = Depends(get_service),
):
    service.remove_friend(x_session_id, login)


@app.get("/users/{login}/friends")
def list_friends(login: str, service: JackutService = Depends(get_service)):
    return _list_response(service.list_friends(login))


@app.get("/users/{login}/friends/{other}")
def is_friend(login: str, other: str, service: JackutService = Depends(get_service)):
    return {"result": service.is_friend(login, other)}


# --- REST: notes ---


@app.post("/notes", status_code=201)
def send_note(
    body: NoteBody,
    x_session_id: str | None = Header(None, alias=SESSION_HEADER),
    service: JackutService = Depends(get_service),
):
    service.send_note(x_session_id, body.recipient, body.text)
    return {"recipient": body.recipient}


@app.post("/notes/read")
def read_note(
    x_session_id: str | None = Header(None, alias=SESSION_HEADER),
    service: JackutService = Depends(get_service),
):
    note = service.read_note(x_session_id)
    return {"sender": note.sender, "text": note.text}


# --- REST: communities ---


@app.post("/communities", status_code=201)
def create_community(
    body: CommunityBody,
    x_session_id: str | None = Header(None, alias=SESSION_HEADER),
    service: JackutService = Depends(get_service),
):
    service.create_community(x_session_id, body.name, body.description)
    return {"name": body.name}


@app.get("/communities/{name}")
def describe_community(name: str, service: JackutService = Depends(get_service)):
    return {
        "name": name,
        "description": service.describe_community(name),
        "owner": service.community_owner(name),
    }


@app.get("/communities/{name}/members")
def community_members(name: str, service: JackutService = Depends(get_service)):
    return _list_response(service.community_members(name))


@app.post("/communities/{name}/members", status_code=204)
def add_member(
    name: str,
    x_session_id: str | None = Header(None, alias=SESSION_HEADER),
    service: JackutService = Depends(get_service),
):
    service.add_member(x_session_id, name)


@app.post("/communities/{name}/messages", status_code=201)
def broadcast(
    name: str,
    body: MessageBody,
    x_session_id: str | None = Header(None, alias=SESSION_HEADER),
    service: JackutService = Depends(get_service),
):
    service.broadcast(x_session_id, name, body.text)
    return {"community": name}


@app.post("/messages/read")
def read_broadcast(
    x_session_id: str | None = Header(None, alias=SESSION_HEADER),
    service: JackutService = Depends(get_service),
):
    message = service.read_broadcast(x_session_id)
    return {"sender": message.sender, "community": message.community, "text": message.text}


@app.get("/users/{login}/communities")
def list_memberships(login: str, service: JackutService = Depends(get_service)):
    return _list_response(service.list_memberships(login))


# --- REST: enemies, crushes, idols ---


@app.post("/enemies/{login}", status_code=204)
def add_enemy(
    login: str,
    x_session_id: str | None = Header(None, alias=SESSION_HEADER),
    service: JackutService = Depends(get_service),
):
    service.add_enemy(x_session_id, login)


@app.get("/enemies/{login}")
def is_enemy(
    login: str,
    x_session_id: str | None = Header(None, alias=SESSION_HEADER),
    service: JackutService = Depends(get_service),
):
    return {"result": service.is_enemy(x_session_id, login)}


@app.post("/crushes/{login}", status_code=204)
def add_crush(
    login: str,
    x_session_id: str | None = Header(None, alias=SESSION_HEADER),
    service: JackutService = Depends(get_service),
):
    service.add_crush(x_session_id, login)


@app.get("/crushes")
def list_crushes(
    x_session_id: str | None = Header(None, alias=SESSION_HEADER),
    service: JackutService = Depends(get_service),
):
    return _list_response(service.list_crushes(x_session_id))


@app.get("/crushes/{login}")
def is_crush(
    login: str,
    x_session_id: str | None = Header(None, alias=SESSION_HEADER),
    service: JackutService = Depends(get_service),
):
    return {"result": service.is_crush(x_session_id, login)}


@app.post("/idols/{login}", status_code=204)
def add_idol(
    login: str,
    x_session_id: str | None = Header(None, alias=SESSION_HEADER),
    service: JackutService = Depends(get_service),
):
    service.add_idol(x_session_id, login)


@app.get("/users/{login}/fans")
def list_fans(login: str, service: JackutService = Depends(get_service)):
    return _list_response(service.list_fans(login))


@app.get("/users/{login}/fans/{fan}")
def is_fan(login: str, fan: str, service: JackutService = Depends(get_service)):
    return {"result": service.is_fan(fan, login)}


@app.get("/users/{login}/idols")
def list_idols(login: str, service: JackutService = Depends(get_service)):
    return _list_response(service.list_idols(login))
