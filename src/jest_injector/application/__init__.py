"""Application layer - the injector facade."""

from jest_injector.application.injector import Injector

__all__ = ["Injector"]
