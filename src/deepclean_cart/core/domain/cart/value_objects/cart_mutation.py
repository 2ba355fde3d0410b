from dataclasses import dataclass, field
from enum import Enum
from uuid import uuid4


class MutationStatus(str, Enum):
    PENDING = "pending"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


class MutationType(str, Enum):
    ADD = "add"
    REMOVE = "remove"
    UPDATE_QUANTITY = "update_quantity"
    CLEAR = "clear"


@dataclass
class CartMutation:
    """One cart change tracked from request to server confirmation.

    Transitions are PENDING -> COMMITTED or PENDING -> ROLLED_BACK, exactly once.
    """

    operation: MutationType
    target_id: str | None = None
    id: str = field(default_factory=lambda: str(uuid4()))
    status: MutationStatus = MutationStatus.PENDING
    error: str | None = None

    def commit(self) -> None:
        self._transition(MutationStatus.COMMITTED)

    def roll_back(self, error: str | None = None) -> None:
        self._transition(MutationStatus.ROLLED_BACK)
        self.error = error

    @property
    def is_settled(self) -> bool:
        return self.status is not MutationStatus.PENDING

    def _transition(self, target: MutationStatus) -> None:
        if self.is_settled:
            raise ValueError(f"Mutation {self.id} already {self.status.value}")
        self.status = target
