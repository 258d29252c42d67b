"""
Memora FastAPI Application

A REST API server for Memora memory journaling.
Provides endpoints for memory CRUD, the grouped timeline, and the memory
network (stateless graph builds plus interactive network view sessions).
"""

import math
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from memora.config import Config
from memora.core.factory import MemoryStoreFactory, RendererFactory
from memora.core.graph import GraphBuilder
from memora.core.memory_store.base import MemoryStore
from memora.core.renderer import RENDERER_EVENTS
from memora.models import (
    ActiveFilter,
    AvailableFilters,
    FilterKind,
    Location,
    MemoryRecord,
    Mood,
    Resolution,
)
from memora.services import NetworkView, TimelineService
from memora.utils import (
    MemoraError,
    NotFoundError,
    RendererError,
    ValidationError,
    generate_memory_id,
    generate_session_id,
    get_logger,
    setup_logging_from_config,
)

# Global store and open network sessions
config: Config | None = None
store: MemoryStore | None = None
sessions: dict[str, NetworkView] = {}
logger = get_logger(__name__)


# Pydantic models for API
class CreateMemoryRequest(BaseModel):
    """Request model for creating a memory."""

    user_id: str = Field(..., description="Owner user ID")
    title: str = Field(default="", max_length=200)
    content: str = Field(default="", max_length=5000)
    memory_date: datetime | None = Field(default=None, description="Defaults to now")
    mood: Mood | None = None
    tags: list[str] = Field(default_factory=list)
    photos: list[str] = Field(default_factory=list)
    audio_url: str = ""
    location: Location | None = None
    collaborators: list[str] = Field(default_factory=list)


class UpdateMemoryRequest(BaseModel):
    """Request model for updating a memory. Omitted fields are left unchanged."""

    title: str | None = Field(default=None, max_length=200)
    content: str | None = Field(default=None, max_length=5000)
    memory_date: datetime | None = None
    mood: Mood | None = None
    tags: list[str] | None = None
    photos: list[str] | None = None
    audio_url: str | None = None
    location: Location | None = None
    collaborators: list[str] | None = None


class OpenSessionRequest(BaseModel):
    """Request model for opening a network view session."""

    user_id: str
    container_id: str = "network"


class NetworkEventRequest(BaseModel):
    """A renderer interaction event relayed from the browser."""

    event: str = Field(..., description="node_click, node_hover, canvas_click or stabilized")
    node_id: str | None = None


class SetResolutionRequest(BaseModel):
    resolution: Resolution


class SetFilterRequest(BaseModel):
    kind: FilterKind = FilterKind.NONE
    value: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    store_initialized: bool
    store_backend: str
    open_sessions: int


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown."""
    global config, store

    config = Config.from_env()

    setup_logging_from_config(config)

    logger.info("Starting Memora server")
    logger.info(f"Configuration: store={config.store.backend} ({config.store.db_path})")

    store = MemoryStoreFactory.create(config)
    await store.initialize()
    logger.info("Memory store initialized")

    yield

    logger.info("Shutting down Memora server")
    for view in sessions.values():
        view.unmount()
    sessions.clear()
    await store.close()
    store = None
    logger.info("Cleanup complete")


# Create FastAPI app
app = FastAPI(
    title="Memora API",
    description="Memory journaling with a day/month/year memory network",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _require_store() -> MemoryStore:
    if not store:
        raise HTTPException(status_code=503, detail="Memory store not initialized")
    return store


def _require_session(session_id: str) -> NetworkView:
    view = sessions.pop(session_id, None)
    if view is None:
        raise HTTPException(status_code=404, detail="Network session not found")
    # Most recently used sessions live at the end
    sessions[session_id] = view
    return view


def _new_view(container_id: str) -> NetworkView:
    """Network view wired to the configured visual encoding and renderer options."""
    return NetworkView(
        renderer_factory=RendererFactory.vis_network(config, container_id),
        builder=GraphBuilder(config.graph),
        options=config.renderer,
    )


def _evict_idle_sessions() -> None:
    """Unmount least recently used sessions until there is room for one more."""
    while len(sessions) >= config.server.max_sessions:
        session_id = next(iter(sessions))
        sessions.pop(session_id).unmount()
        get_logger(__name__, session_id=session_id).info("Evicted idle network session")


def _parse_filter(kind: FilterKind, value: str | None) -> ActiveFilter:
    try:
        return ActiveFilter(kind=kind, value=value)
    except ValueError as e:
        raise ValidationError(
            f"Invalid filter {kind.value}:{value}", {"kind": kind.value, "value": value}
        ) from e


def _session_snapshot(session_id: str, view: NetworkView) -> dict[str, Any]:
    """Serialize a network view for the browser client."""
    panel = view.detail_panel()
    return {
        "session_id": session_id,
        "resolution": view.resolution.value,
        "filter": view.active_filter.model_dump(mode="json"),
        "interactive": view.interactive,
        "error": view.last_error.message if view.last_error else None,
        "selected": panel.model_dump() if panel else None,
        "tooltip": view.tooltip.model_dump() if view.tooltip else None,
        "available_filters": view.available_filters.model_dump(),
        "memory_count": len(view.records),
        "graph": view.renderer.payload() if view.interactive else None,
    }


# Health check endpoint
@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(
        status="healthy" if store else "initializing",
        store_initialized=store is not None,
        store_backend=config.store.backend if config else "unknown",
        open_sessions=len(sessions),
    )


# Memory endpoints
@app.post("/memories")
async def create_memory(request: CreateMemoryRequest):
    """
    Create a new memory.

    The memory date defaults to now. Tags are normalized to lowercase and
    de-duplicated.
    """
    memory_store = _require_store()

    try:
        record = MemoryRecord(
            id=generate_memory_id(),
            user_id=request.user_id,
            title=request.title,
            content=request.content,
            memory_date=request.memory_date or datetime.now(),
            mood=request.mood,
            tags=request.tags,
            photos=request.photos,
            audio_url=request.audio_url,
            location=request.location,
            collaborators=request.collaborators,
        )
        await memory_store.add_memory(record)
        return record.model_dump(mode="json")
    except MemoraError as e:
        logger.error(f"Error creating memory: {e}")
        raise HTTPException(status_code=500, detail=str(e)) from e


@app.get("/memories")
async def list_memories(
    user_id: str = Query(...),
    ascending: bool = Query(default=False),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=50, ge=1, le=500),
):
    """
    List one page of a user's memories sorted by memory date (newest first by default).

    "total" counts all of the user's memories, not just this page.
    """
    memory_store = _require_store()

    try:
        total = await memory_store.count_memories(user_id)
        records = await memory_store.list_memories(
            user_id, ascending=ascending, limit=limit, offset=(page - 1) * limit
        )
        return {
            "memories": [record.model_dump(mode="json") for record in records],
            "total": total,
            "page": page,
            "pages": math.ceil(total / limit),
        }
    except MemoraError as e:
        logger.error(f"Error listing memories: {e}")
        raise HTTPException(status_code=500, detail=str(e)) from e


@app.get("/memories/{memory_id}")
async def get_memory(memory_id: str):
    """Retrieve a specific memory by ID."""
    memory_store = _require_store()

    record = await memory_store.get_memory(memory_id)
    if not record:
        raise HTTPException(status_code=404, detail="Memory not found")
    return record.model_dump(mode="json")


@app.put("/memories/{memory_id}")
async def update_memory(memory_id: str, request: UpdateMemoryRequest):
    """Update an existing memory. Only provided fields change."""
    memory_store = _require_store()

    try:
        existing = await memory_store.get_memory(memory_id)
        if not existing:
            raise NotFoundError(f"Memory not found: {memory_id}")

        changes = request.model_dump(exclude_unset=True)
        # A memory keeps its date unless a new one is given
        if changes.get("memory_date") is None:
            changes.pop("memory_date", None)
        updated = MemoryRecord.model_validate({**existing.model_dump(), **changes})
        await memory_store.update_memory(updated)
        return (await memory_store.get_memory(memory_id)).model_dump(mode="json")
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except MemoraError as e:
        logger.error(f"Error updating memory: {e}")
        raise HTTPException(status_code=500, detail=str(e)) from e


@app.delete("/memories/{memory_id}")
async def delete_memory(memory_id: str):
    """Delete a memory."""
    memory_store = _require_store()

    deleted = await memory_store.delete_memory(memory_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Memory not found")
    return {"id": memory_id, "deleted": True}


# Timeline endpoint
@app.get("/timeline/grouped")
async def grouped_timeline(user_id: str = Query(...)):
    """Memories grouped by year and month, oldest first."""
    memory_store = _require_store()

    try:
        service = TimelineService(memory_store, list_limit=config.store.list_limit)
        return await service.grouped(user_id)
    except MemoraError as e:
        logger.error(f"Error grouping timeline: {e}")
        raise HTTPException(status_code=500, detail=str(e)) from e


# Network endpoints
@app.get("/network")
async def get_network(
    user_id: str = Query(...),
    resolution: Resolution = Query(default=Resolution.DAY),
    filter_kind: FilterKind = Query(default=FilterKind.NONE),
    filter_value: str | None = Query(default=None),
):
    """
    Build the memory network for one resolution and filter.

    Stateless: returns the vis-network payload without opening a session.
    """
    memory_store = _require_store()

    try:
        active_filter = _parse_filter(filter_kind, filter_value)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.message) from e

    view = _new_view("network")
    with view:
        view.state.set_resolution(resolution)
        view.state.set_filter(active_filter)
        try:
            await view.load(memory_store, user_id, limit=config.store.list_limit)
        except MemoraError as e:
            logger.error(f"Error building network: {e}")
            raise HTTPException(status_code=500, detail=str(e)) from e

        if not view.interactive:
            raise HTTPException(status_code=500, detail="Renderer unavailable")

        return {
            **view.renderer.payload(),
            "filter": active_filter.model_dump(mode="json"),
            "available_filters": view.available_filters.model_dump(),
            "memory_count": len(view.records),
        }


@app.get("/network/filters", response_model=AvailableFilters)
async def get_network_filters(user_id: str = Query(...)):
    """Moods and tags present in the user's memories."""
    memory_store = _require_store()

    records = await memory_store.list_memories(
        user_id, ascending=True, limit=config.store.list_limit
    )
    return AvailableFilters.from_records(records)


@app.post("/network/sessions")
async def open_session(request: OpenSessionRequest):
    """
    Mount a network view for a user and build the initial Day graph.
    """
    memory_store = _require_store()

    view = _new_view(request.container_id).mount()

    try:
        await view.load(memory_store, request.user_id, limit=config.store.list_limit)
    except MemoraError as e:
        view.unmount()
        logger.error(f"Error opening network session: {e}")
        raise HTTPException(status_code=500, detail=str(e)) from e

    _evict_idle_sessions()
    session_id = generate_session_id()
    sessions[session_id] = view
    get_logger(__name__, session_id=session_id, user_id=request.user_id).info(
        "Opened network session"
    )
    return _session_snapshot(session_id, view)


@app.get("/network/sessions/{session_id}")
async def get_session(session_id: str):
    """Current state of a network session."""
    return _session_snapshot(session_id, _require_session(session_id))


@app.post("/network/sessions/{session_id}/events")
async def session_event(session_id: str, request: NetworkEventRequest):
    """
    Relay a renderer event (click, hover, canvas click, stabilized).
    """
    view = _require_session(session_id)

    if request.event not in RENDERER_EVENTS:
        raise HTTPException(status_code=422, detail=f"Unknown event: {request.event}")

    args = [request.node_id] if request.event in ("node_click", "node_hover") else []
    if request.event == "node_click" and request.node_id is None:
        raise HTTPException(status_code=422, detail="node_click requires node_id")

    try:
        view.dispatch(request.event, *args)
    except RendererError as e:
        raise HTTPException(status_code=409, detail=e.message) from e

    return _session_snapshot(session_id, view)


@app.put("/network/sessions/{session_id}/resolution")
async def set_session_resolution(session_id: str, request: SetResolutionRequest):
    """Zoom control: jump to a resolution."""
    view = _require_session(session_id)
    view.set_resolution(request.resolution)
    return _session_snapshot(session_id, view)


@app.put("/network/sessions/{session_id}/filter")
async def set_session_filter(session_id: str, request: SetFilterRequest):
    """Replace the active filter."""
    view = _require_session(session_id)

    try:
        active_filter = _parse_filter(request.kind, request.value)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.message) from e

    view.set_filter(active_filter)
    return _session_snapshot(session_id, view)


@app.post("/network/sessions/{session_id}/refresh")
async def refresh_session(session_id: str):
    """Reload the session's memories after create/edit/delete."""
    memory_store = _require_store()
    view = _require_session(session_id)

    try:
        await view.load(memory_store, view.user_id, limit=config.store.list_limit)
    except MemoraError as e:
        logger.error(f"Error refreshing network session: {e}")
        raise HTTPException(status_code=500, detail=str(e)) from e

    return _session_snapshot(session_id, view)


@app.delete("/network/sessions/{session_id}")
async def close_session(session_id: str):
    """Unmount a network view."""
    view = sessions.pop(session_id, None)
    if view is None:
        raise HTTPException(status_code=404, detail="Network session not found")
    view.unmount()
    return {"session_id": session_id, "closed": True}


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Memora API",
        "version": "1.0.0",
        "description": "Memory journaling with a day/month/year memory network",
        "docs": "/docs",
        "health": "/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app:app", host="0.0.0.0", port=8000, reload=True, log_level="info")
