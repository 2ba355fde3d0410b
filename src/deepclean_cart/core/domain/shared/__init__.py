from deepclean_cart.core.domain.shared.error_kind import ErrorKind

__all__ = ["ErrorKind"]
