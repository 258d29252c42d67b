"""
Shared test fixtures for all test modules.
"""

from datetime import datetime

import pytest

from memora.config import RenderOptions
from memora.core.renderer.base import GraphRenderer
from memora.models import Graph, MemoryRecord
from memora.utils.exceptions import RendererError


class RecordingRenderer(GraphRenderer):
    """In-memory renderer that records what the network view pushes to it."""

    def __init__(self, log: list[str] | None = None, name: str = "renderer"):
        super().__init__()
        self.log = log if log is not None else []
        self.name = name
        self.graph: Graph | None = None
        self.options: RenderOptions | None = None
        self.fit_calls = 0
        self.fail_on_set_graph = False

    def set_graph(self, graph: Graph, options: RenderOptions) -> None:
        self._ensure_alive()
        if self.fail_on_set_graph:
            raise RendererError("set_graph failed")
        self.graph = graph
        self.options = options
        self.log.append(f"set_graph:{self.name}")

    def fit(self) -> None:
        self._ensure_alive()
        self.fit_calls += 1

    def _teardown(self) -> None:
        self.log.append(f"destroy:{self.name}")


class RecordingRendererFactory:
    """Creates numbered RecordingRenderers and logs their lifecycle."""

    def __init__(self):
        self.log: list[str] = []
        self.created: list[RecordingRenderer] = []
        self.fail = False

    def __call__(self) -> RecordingRenderer:
        if self.fail:
            raise RendererError("Cannot create renderer: container is not mounted")
        renderer = RecordingRenderer(self.log, name=f"r{len(self.created) + 1}")
        self.created.append(renderer)
        self.log.append(f"create:{renderer.name}")
        return renderer

    @property
    def latest(self) -> RecordingRenderer:
        return self.created[-1]


def make_record(
    record_id: str,
    memory_date: datetime | str | None,
    title: str = "",
    mood: str | None = None,
    tags: list[str] | None = None,
    photos: list[str] | None = None,
    content: str = "",
    user_id: str = "user_001",
) -> MemoryRecord:
    """Build a MemoryRecord with sensible defaults."""
    return MemoryRecord(
        id=record_id,
        user_id=user_id,
        title=title,
        content=content,
        memory_date=memory_date,
        mood=mood,
        tags=tags or [],
        photos=photos or [],
    )


@pytest.fixture
def renderer_factory():
    """Renderer factory recording create/set_graph/destroy order."""
    return RecordingRendererFactory()


@pytest.fixture
def sample_records():
    """
    Five memories across three months of 2024.

    A and B share Jan 3; C is Jan 15; D is Feb 1; E is Mar 20.
    A and D are happy; C is tagged "travel"; B has a photo.
    """
    return [
        make_record("A", datetime(2024, 1, 3, 9, 0), title="Breakfast", mood="happy"),
        make_record(
            "B",
            datetime(2024, 1, 3, 18, 30),
            title="Sunset",
            mood="peaceful",
            photos=["/uploads/sunset.jpg"],
        ),
        make_record("C", datetime(2024, 1, 15), title="Train ride", tags=["travel"]),
        make_record("D", datetime(2024, 2, 1), title="Birthday", mood="happy"),
        make_record("E", datetime(2024, 3, 20), title="", mood="reflective"),
    ]


@pytest.fixture
def make_memory():
    """Factory fixture building MemoryRecords."""
    return make_record
