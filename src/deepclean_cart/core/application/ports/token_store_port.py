from abc import ABC, abstractmethod

from deepclean_cart.core.domain.session import Customer


class TokenStorePort(ABC):
    """Device storage for the bearer token and the signed-in customer."""

    @abstractmethod
    async def get_token(self) -> str | None:
        pass

    @abstractmethod
    async def get_customer(self) -> Customer | None:
        pass

    @abstractmethod
    async def save(self, customer: Customer, token: str) -> None:
        pass

    @abstractmethod
    async def clear(self) -> None:
        pass
