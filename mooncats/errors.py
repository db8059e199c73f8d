"""Errors raised while building LuaCATS documentation."""


class MoonCatsError(Exception):
    """Base error for every failure that aborts a documentation build."""
    pass


class SchemaError(MoonCatsError):
    """A doc.json record does not match the expected wire schema."""
    pass


class WorkspaceError(MoonCatsError):
    """A source file could not be read or its definitions are inconsistent."""
    pass


class DocItemError(MoonCatsError):
    """A definition's kind does not match the data it carries."""
    pass


class LuaLSError(MoonCatsError):
    """The lua-language-server doc export failed."""
    pass
