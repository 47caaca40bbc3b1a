from abc import ABC, abstractmethod


class ICryptoRepository(ABC):
    @abstractmethod
    async def hash_password(self, password: str) -> str:
        """Return an opaque hash for a plaintext password."""
        pass

    @abstractmethod
    async def compare_password(self, password: str, hashed_password: str) -> bool:
        """Check a plaintext password against a stored hash."""
        pass
