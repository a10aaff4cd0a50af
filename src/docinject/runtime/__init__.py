from docinject.runtime.builder import Builder, build
from docinject.runtime.wiring import build_engine

__all__ = ['Builder', 'build', 'build_engine']
