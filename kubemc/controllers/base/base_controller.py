"""Base controller with async patterns for kubemc.

Controllers are awaited from Textual workers and from the CLI, so every data
source exposes the same two coroutines.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class BaseController(ABC):
    """Base controller class.

    Subclasses should implement the abstract methods to provide
    specific data fetching functionality.
    """

    @abstractmethod
    async def check_connection(self) -> bool:
        """Check if the data source is available.

        Returns:
            True if connection is available, False otherwise
        """
        ...

    @abstractmethod
    async def fetch_all(self) -> dict[str, Any]:
        """Fetch all data from the source.

        Returns:
            Dictionary containing all fetched data
        """
        ...
