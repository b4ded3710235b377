from adapters.registry import ADAPTERS, get_adapter

__all__ = ["ADAPTERS", "get_adapter"]
