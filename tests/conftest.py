"""
Pytest configuration and fixtures
"""

import itertools
import pytest
from unittest.mock import AsyncMock, MagicMock
from src.services.app_state import AppState
from src.services.card_manager import CardManager
from src.services.column_manager import ColumnManager
from src.services.document_store import DocumentStore
from src.services.note_manager import NoteManager
from src.services.project_manager import ProjectManager
from src.services.task_manager import TaskManager

START_TIME = 1_700_000_000_000


class FakeClock:
    """Millisecond clock that only moves when told to"""
    
    def __init__(self, start: int = START_TIME):
        self.current = start
    
    def __call__(self) -> int:
        return self.current
    
    def advance(self, ms: int) -> int:
        self.current += ms
        return self.current


@pytest.fixture
def clock():
    """Controllable clock"""
    return FakeClock()


@pytest.fixture
def state(clock):
    """Empty application state with deterministic ids"""
    counter = itertools.count(1)
    return AppState(clock=clock, id_factory=lambda: f"id-{next(counter)}")


@pytest.fixture
def column_manager(state):
    return ColumnManager(state)


@pytest.fixture
def task_manager(state):
    return TaskManager(state)


@pytest.fixture
def card_manager(state, task_manager):
    return CardManager(state, task_manager)


@pytest.fixture
def note_manager(state):
    return NoteManager(state)


@pytest.fixture
def project_manager(state, column_manager):
    return ProjectManager(state, column_manager)


@pytest.fixture
def project(project_manager):
    """Current project with the default three columns"""
    return project_manager.create_project("Test Project")


@pytest.fixture
def columns(column_manager, project):
    """Default columns of the test project: To Do, In Progress, Done"""
    return column_manager.get_project_columns(project.id)


@pytest.fixture
def mock_store():
    """Mock document store"""
    store = MagicMock(spec=DocumentStore)
    store.load = AsyncMock(return_value={})
    store.save = AsyncMock(return_value=None)
    return store
