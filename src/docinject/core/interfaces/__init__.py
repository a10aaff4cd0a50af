from .classifier import ContentRendererProtocol
from .engine import ExpanderProtocol, InjectorProtocol
from .render import MarkdownRendererProtocol, MinifierProtocol, MinifierRegistryProtocol

__all__ = [
    'ContentRendererProtocol',
    'ExpanderProtocol',
    'InjectorProtocol',
    'MarkdownRendererProtocol',
    'MinifierProtocol',
    'MinifierRegistryProtocol',
]
