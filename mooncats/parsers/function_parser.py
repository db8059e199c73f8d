"""Parsing of function signatures shared by globals, tables and classes."""

from mooncats.domain.items import Argument, ArgumentKind, Function, Return
from mooncats.errors import DocItemError
from mooncats.schema import ArgType, Extends, ExtendsType, FuncArg, FuncReturn

METHOD_PREFIX = '(method) '

_SELF_MARKER = 'self'
_VARARG_MARKER = '...'


def parse_function(extends: Extends) -> Function:
    """Build a Function from a function-typed extends.

    Argument and return order is preserved. A ``(method) `` prefix on the
    rendered view is dropped.
    """
    if extends.extends_type is not ExtendsType.FUNCTION:
        raise DocItemError(f"Expected a function, got {extends.extends_type.value}")

    view = extends.view
    if view.startswith(METHOD_PREFIX):
        view = view[len(METHOD_PREFIX):]

    return Function(
        description=extends.rawdesc,
        view=view,
        arguments=[parse_argument(arg) for arg in extends.args],
        returns=[parse_return(ret) for ret in extends.returns],
        is_async=bool(extends.is_async),
        deprecated=bool(extends.deprecated),
    )


def parse_argument(arg: FuncArg) -> Argument:
    if arg.arg_type is ArgType.SELF:
        kind, lua_type = ArgumentKind.SELF, _SELF_MARKER
    elif arg.arg_type is ArgType.VARARG:
        kind, lua_type = ArgumentKind.VARARG, _VARARG_MARKER
    elif arg.arg_type is ArgType.DOC_TYPE:
        kind, lua_type = ArgumentKind.DOC_TYPE, arg.view
    else:
        # Undocumented parameters: the language server infers a plain type.
        kind, lua_type = ArgumentKind.LOCAL, arg.view

    return Argument(
        name=arg.name,
        description=arg.rawdesc,
        kind=kind,
        lua_type=lua_type,
    )


def parse_return(ret: FuncReturn) -> Return:
    return Return(name=ret.name, lua_type=ret.view, description=ret.rawdesc)
