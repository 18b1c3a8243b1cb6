# taskboard/projects.py - project registry
import json
import threading
from typing import Dict, Iterator, Optional, Tuple

from pydantic import ValidationError

from .models import Project
from .utils import setup_logger

logger = setup_logger(__name__)

STORAGE_KEY = "projects"
OTHER_KEY = "other"
OTHER_PROJECT = Project(name="Other", color="#6b7280")

DEFAULT_PROJECTS: Dict[str, Project] = {
    "HH bbyy": Project(name="HH bbyy", color="#3b82f6"),
    "EF Tracking": Project(name="EF Tracking", color="#ef4444"),
    "FCC 6Jets": Project(name="FCC 6Jets", color="#8b5cf6"),
    "misc-atlas": Project(name="Misc. ATLAS", color="#f59e0b"),
    OTHER_KEY: OTHER_PROJECT,
}

# Preset colors offered for new projects
PROJECT_COLORS = [
    "#3b82f6", "#ef4444", "#8b5cf6", "#f59e0b", "#10b981",
    "#ec4899", "#06b6d4", "#f97316", "#14b8a6", "#6366f1",
    "#84cc16", "#e11d48", "#0ea5e9", "#a855f7", "#22c55e",
]


class ProjectRegistry:
    """Mapping of project key -> display metadata, backed by a key-value store.

    The caller owns the instance and passes it to whatever needs project
    names (the ICS export does, the scorer does not).
    """

    def __init__(self, store):
        self.store = store
        self._projects: Dict[str, Project] = {}
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def load(self) -> Dict[str, Project]:
        """Read the registry from the store, falling back to the defaults."""
        with self._lock:
            self._projects = self._read()
            return dict(self._projects)

    def save(self) -> None:
        """Overwrite the stored registry with the in-memory one."""
        with self._lock:
            payload = {key: p.model_dump() for key, p in self._projects.items()}
            self.store.set_item(STORAGE_KEY, json.dumps(payload, ensure_ascii=False))
            logger.debug(f"Saved {len(payload)} projects")

    def _read(self) -> Dict[str, Project]:
        saved = self.store.get_item(STORAGE_KEY)
        if not saved:
            return dict(DEFAULT_PROJECTS)

        try:
            raw = json.loads(saved)
        except ValueError as e:
            logger.warning(f"Stored projects unreadable, using defaults: {e}")
            return dict(DEFAULT_PROJECTS)
        if not isinstance(raw, dict):
            logger.warning("Stored projects are not an object, using defaults")
            return dict(DEFAULT_PROJECTS)

        # a bad entry is dropped on its own so the rest survive the next save
        projects: Dict[str, Project] = {}
        for key, value in raw.items():
            try:
                projects[str(key)] = Project.model_validate(value)
            except ValidationError as e:
                logger.warning(f"Dropping stored project '{key}': {e.error_count()} invalid field(s)")

        if OTHER_KEY not in projects:
            projects[OTHER_KEY] = OTHER_PROJECT
        return projects

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------
    def get(self, key: str) -> Optional[Project]:
        return self._projects.get(key)

    def display_name(self, key: str) -> str:
        project = self.get(key)
        if project is None or not project.name:
            return OTHER_PROJECT.name
        return project.name

    def items(self) -> Iterator[Tuple[str, Project]]:
        return iter(list(self._projects.items()))

    def __contains__(self, key: str) -> bool:
        return key in self._projects

    def __len__(self) -> int:
        return len(self._projects)

    # ------------------------------------------------------------------
    # Mutation (each change is persisted immediately)
    # ------------------------------------------------------------------
    def next_color(self) -> str:
        return PROJECT_COLORS[len(self._projects) % len(PROJECT_COLORS)]

    def add(self, key: str, name: str, color: Optional[str] = None) -> Project:
        key = key.strip()
        if not key:
            raise ValueError("Project key must not be empty")
        with self._lock:
            if key in self._projects:
                raise ValueError(f"Project '{key}' already exists")
            project = Project(name=name or key, color=color or self.next_color())
            self._projects[key] = project
            self.save()
        logger.info(f"Added project '{key}' ({project.color})")
        return project

    def update(self, key: str, name: Optional[str] = None, color: Optional[str] = None) -> Project:
        with self._lock:
            current = self._projects.get(key)
            if current is None:
                raise KeyError(key)
            project = current.model_copy(update={
                "name": name if name else current.name,
                "color": color if color else current.color,
            })
            self._projects[key] = project
            self.save()
        logger.info(f"Updated project '{key}'")
        return project

    def remove(self, key: str) -> None:
        if key == OTHER_KEY:
            raise ValueError("The 'other' project cannot be removed")
        with self._lock:
            if key not in self._projects:
                raise KeyError(key)
            del self._projects[key]
            self.save()
        logger.info(f"Removed project '{key}'")
