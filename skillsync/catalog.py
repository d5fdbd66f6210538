"""In-process skill catalog owned by the API layer.

A scan replaces the whole list at once; between scans it is read-only apart
from appending freshly created skills.
"""

from __future__ import annotations

import threading

from skillsync.schemas.skill import Agent, Skill


class SkillCatalog:
    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._skills: list[Skill] = []

    def replace(self, skills: list[Skill]) -> None:
        with self._lock:
            self._skills = list(skills)

    def add(self, skill: Skill) -> None:
        with self._lock:
            self._skills = [*self._skills, skill]

    def all(self) -> list[Skill]:
        with self._lock:
            return list(self._skills)

    def by_agent(self, agent: Agent) -> list[Skill]:
        with self._lock:
            return [s for s in self._skills if s.agent == agent]

    def get(self, skill_id: str) -> Skill | None:
        with self._lock:
            return next((s for s in self._skills if s.id == skill_id), None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._skills)
