"""Abstract base class for key-value tree stores."""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


def join_path(*parts: str) -> str:
    """Join path segments with '/', ignoring empty segments and stray slashes."""
    return "/".join(p.strip("/") for p in parts if p and p.strip("/"))


class TreeStore(ABC):
    """
    Path-addressed key-value tree, the shape of a hosted realtime database.

    Paths are '/'-separated. A collection path (e.g. ``root/feedback``) maps
    child keys to JSON objects; a child path (``root/feedback/<key>``)
    addresses one object.

    Read failures raise StoreReadError, write failures raise StoreWriteError.
    """

    @abstractmethod
    def push(self, path: str, value: Dict[str, Any]) -> str:
        """
        Store value under a newly generated child key of path.

        Returns the generated key.
        """
        pass

    @abstractmethod
    def get(self, path: str) -> Optional[Any]:
        """
        Read the value at path.

        For a collection path returns a dict of key -> value. Returns None if
        nothing is stored there.
        """
        pass

    @abstractmethod
    def update(self, path: str, values: Dict[str, Any]) -> None:
        """Merge values into the object at path (creating it if absent)."""
        pass

    @abstractmethod
    def remove(self, path: str) -> None:
        """Remove whatever is stored at path. Removing nothing is not an error."""
        pass

    @abstractmethod
    def query(self, path: str, field: str, equal_to: Any) -> Dict[str, Any]:
        """Return the children of the collection at path whose field equals equal_to."""
        pass
