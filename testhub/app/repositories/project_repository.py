from abc import ABC, abstractmethod
from typing import List, Optional

from testhub.domain.entities import Project


class IProjectRepository(ABC):
    """Project repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, project_id: str) -> Optional[Project]:
        """Get project by ID"""
        pass

    @abstractmethod
    async def list_accessible(
        self, user_id: str, team_id: Optional[str]
    ) -> List[Project]:
        """Projects created by the user or belonging to the given team"""
        pass

    @abstractmethod
    async def create(self, project: Project) -> Project:
        """
        Insert a new project.

        Raises DuplicateKeyError on a unique-constraint violation.
        """
        pass

    @abstractmethod
    async def update(self, project: Project) -> Project:
        """
        Update an existing project.

        Raises DuplicateKeyError when the new key is taken.
        """
        pass

    @abstractmethod
    async def delete(self, project: Project) -> None:
        """Delete a project with its runs, cases and results"""
        pass
