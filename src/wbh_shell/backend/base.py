from abc import ABC, abstractmethod
from typing import Optional

from ..data.schemas import ResourceInfo


class BaseResourceBackend(ABC):
    """
    The abstract "contract" for all webhook backends.

    Every operation either returns normally or raises a `BackendError`;
    transport failures must be converted before they leave the backend.
    """

    backend_key: Optional[str] = None

    @abstractmethod
    async def connect(self, handle: str) -> ResourceInfo:
        """Looks up the resource behind `handle` and returns its details."""
        raise NotImplementedError

    @abstractmethod
    async def invoke(self, handle: str, action: str, payload: str) -> None:
        """Performs a named action (e.g. "send", "rename") on the resource."""
        raise NotImplementedError

    @abstractmethod
    async def disconnect(self, handle: str) -> None:
        """Destroys the resource behind `handle`."""
        raise NotImplementedError

    async def aclose(self) -> None:
        """Releases any pooled connections. The default has nothing to release."""
        return None

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()
