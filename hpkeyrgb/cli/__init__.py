from .entrypoint import main

__all__ = ["main"]
