from deepclean_cart.core.application.ports import TokenStorePort
from deepclean_cart.core.domain.session import Customer


class InMemoryTokenStore(TokenStorePort):
    def __init__(self, customer: Customer | None = None, token: str | None = None) -> None:
        self._customer = customer
        self._token = token

    async def get_token(self) -> str | None:
        return self._token

    async def get_customer(self) -> Customer | None:
        return self._customer

    async def save(self, customer: Customer, token: str) -> None:
        self._customer = customer
        self._token = token

    async def clear(self) -> None:
        self._customer = None
        self._token = None
