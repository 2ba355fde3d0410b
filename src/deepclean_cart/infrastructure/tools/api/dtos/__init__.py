from .api_envelope import ApiEnvelope, ErrorBody

__all__ = ["ApiEnvelope", "ErrorBody"]
