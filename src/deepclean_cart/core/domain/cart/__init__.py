from deepclean_cart.core.domain.cart.entities.cart_item import CartItem
from deepclean_cart.core.domain.cart.value_objects.cart_mutation import (
    CartMutation,
    MutationStatus,
    MutationType,
)
from deepclean_cart.core.domain.cart.value_objects.cart_snapshot import CartSnapshot
from deepclean_cart.core.domain.cart.value_objects.cart_state import CartState
from deepclean_cart.core.domain.cart.value_objects.cart_summary import CartSummary

__all__ = [
    "CartItem",
    "CartMutation",
    "CartSnapshot",
    "CartState",
    "CartSummary",
    "MutationStatus",
    "MutationType",
]
