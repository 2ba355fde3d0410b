from deepclean_cart.core.domain.session.customer import Customer

__all__ = ["Customer"]
