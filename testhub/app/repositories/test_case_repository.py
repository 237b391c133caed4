from abc import ABC, abstractmethod
from typing import Optional

from testhub.domain.entities import TestCase


class ITestCaseRepository(ABC):
    """Test case repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, case_id: str) -> Optional[TestCase]:
        """Get test case by ID"""
        pass

    @abstractmethod
    async def create(self, case: TestCase) -> TestCase:
        """Insert a new case; raises DuplicateKeyError on collision"""
        pass

    @abstractmethod
    async def update(self, case: TestCase) -> TestCase:
        """Update an existing case"""
        pass
