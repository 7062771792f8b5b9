from .registry import QueryFileRegistry

__all__ = ["QueryFileRegistry"]
