"""Local user profile: identity, role, and the current project selection.

Stored as ~/.taskdeck/profile.json. Unlike the credentials it holds nothing
secret, so it is a plain JSON file.
"""

from __future__ import annotations

import json
import os
import tempfile
from dataclasses import asdict, dataclass, field, replace
from pathlib import Path
from typing import Any

from .config import get_config_dir

PROFILE_FILE = "profile.json"


@dataclass(frozen=True)
class UserProfile:
    id: str = ""
    name: str = ""
    email: str = ""
    role: str = ""
    current_project: str = ""
    # Comma-separated status vocabulary of the current project, from the last task listing
    statuses: str = ""
    # Project name -> project id
    projects: dict[str, str] = field(default_factory=dict)

    @property
    def current_project_name(self) -> str | None:
        for name, project_id in self.projects.items():
            if project_id == self.current_project:
                return name
        return None

    def resolve_project(self, name_or_id: str) -> str | None:
        """Map a project name (or an id already known) to its id."""
        if name_or_id in self.projects:
            return self.projects[name_or_id]
        if name_or_id in self.projects.values():
            return name_or_id
        return None


def _coerce(data: dict[str, Any]) -> UserProfile:
    projects = data.get("projects")
    if not isinstance(projects, dict):
        projects = {}
    return UserProfile(
        id=str(data.get("id", "")),
        name=str(data.get("name", "")),
        email=str(data.get("email", "")),
        role=str(data.get("role", "")),
        current_project=str(data.get("current_project", "")),
        statuses=str(data.get("statuses", "")),
        projects={str(k): str(v) for k, v in projects.items()},
    )


class ProfileStore:
    """Reads and writes the profile file."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path if self._path is not None else get_config_dir() / PROFILE_FILE

    def load(self) -> UserProfile | None:
        """Return the stored profile, or None if missing or corrupt."""
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text())
        except (json.JSONDecodeError, OSError):
            return None
        if not isinstance(data, dict):
            return None
        return _coerce(data)

    def save(self, profile: UserProfile) -> None:
        directory = self.path.parent
        directory.mkdir(parents=True, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".profile_", suffix=".tmp")
        try:
            with os.fdopen(fd, "w") as f:
                json.dump(asdict(profile), f, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def update_current_project(self, project_id: str) -> UserProfile:
        profile = replace(self.load() or UserProfile(), current_project=project_id)
        self.save(profile)
        return profile

    def update_statuses(self, statuses: str) -> UserProfile:
        profile = replace(self.load() or UserProfile(), statuses=statuses)
        self.save(profile)
        return profile

    def clear(self) -> None:
        """Delete the profile file if it exists."""
        if self.path.exists():
            self.path.unlink()
