from .session import TestSession


__all__ = ['TestSession']
