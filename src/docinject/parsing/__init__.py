from docinject.parsing.directives import (
    BLOCK,
    DIALECTS,
    MARKDOWN,
    MARKUP,
    DirectiveResolver,
    DirectiveScanner,
    default_scanners,
)

__all__ = ['BLOCK', 'DIALECTS', 'MARKDOWN', 'MARKUP', 'DirectiveResolver', 'DirectiveScanner', 'default_scanners']
