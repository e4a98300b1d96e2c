"""Rendering scope: variables, pipes, functions and named templates."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import ChainMap
from typing import TYPE_CHECKING, Any, Callable, Mapping

from quire.value import Value, to_value

if TYPE_CHECKING:
    from .template import Template

DEFAULT_MAX_INCLUDE_DEPTH = 64


class Pipe(ABC):
    """A value transformer used as ``{{ value | name:arg }}``."""

    @abstractmethod
    def invoke(self, value: Value, args: list[Value]) -> Value: ...


class Func(ABC):
    """A function used as ``{{ name(arg, ...) }}``."""

    @abstractmethod
    def invoke(self, args: list[Value]) -> Value: ...


class CallablePipe(Pipe):
    """Adapts ``fn(value, *args)`` to the ``Pipe`` interface."""

    def __init__(self, fn: Callable[..., Any]):
        self.fn = fn

    def invoke(self, value: Value, args: list[Value]) -> Value:
        return to_value(self.fn(value, *args))

    def __repr__(self) -> str:
        return f"CallablePipe({getattr(self.fn, '__name__', self.fn)!r})"


class CallableFunc(Func):
    """Adapts ``fn(*args)`` to the ``Func`` interface."""

    def __init__(self, fn: Callable[..., Any]):
        self.fn = fn

    def invoke(self, args: list[Value]) -> Value:
        return to_value(self.fn(*args))

    def __repr__(self) -> str:
        return f"CallableFunc({getattr(self.fn, '__name__', self.fn)!r})"


class Scope:
    """Four string-keyed maps consulted while rendering.

    ``child()`` layers a fresh map over each of the four, so a child sees
    everything its parent has while its own additions stay local. Setters
    return the scope to allow chaining.
    """

    def __init__(
        self,
        vars: Mapping[str, Any] | None = None,
        *,
        max_include_depth: int = DEFAULT_MAX_INCLUDE_DEPTH,
    ):
        self.vars: ChainMap[str, Value] = ChainMap()
        self.pipes: ChainMap[str, Pipe] = ChainMap()
        self.funcs: ChainMap[str, Func] = ChainMap()
        self.templates: ChainMap[str, Template] = ChainMap()
        self.max_include_depth = max_include_depth
        self.depth = 0
        if vars:
            self.update(vars)

    @classmethod
    def with_defaults(cls, vars: Mapping[str, Any] | None = None, **kwargs: Any) -> "Scope":
        """A scope pre-loaded with the standard pipes and functions."""
        from .extensions import install_defaults

        return install_defaults(cls(vars, **kwargs))

    def child(self) -> "Scope":
        scope = Scope.__new__(Scope)
        scope.vars = self.vars.new_child()
        scope.pipes = self.pipes.new_child()
        scope.funcs = self.funcs.new_child()
        scope.templates = self.templates.new_child()
        scope.max_include_depth = self.max_include_depth
        scope.depth = self.depth
        return scope

    def nested(self) -> "Scope":
        """A child one include level deeper."""
        scope = self.child()
        scope.depth = self.depth + 1
        return scope

    # -- variables ---------------------------------------------------------

    def var(self, name: str) -> Value | None:
        return self.vars.get(name)

    def has_var(self, name: str) -> bool:
        return name in self.vars

    def set_var(self, name: str, value: Any) -> "Scope":
        self.vars[name] = to_value(value)
        return self

    def update(self, values: Mapping[str, Any]) -> "Scope":
        for name, value in values.items():
            self.set_var(name, value)
        return self

    # -- pipes and functions -----------------------------------------------

    def pipe(self, name: str) -> Pipe | None:
        return self.pipes.get(name)

    def set_pipe(self, name: str, pipe: Pipe | Callable[..., Any]) -> "Scope":
        self.pipes[name] = pipe if isinstance(pipe, Pipe) else CallablePipe(pipe)
        return self

    def func(self, name: str) -> Func | None:
        return self.funcs.get(name)

    def set_func(self, name: str, func: Func | Callable[..., Any]) -> "Scope":
        self.funcs[name] = func if isinstance(func, Func) else CallableFunc(func)
        return self

    # -- templates ---------------------------------------------------------

    def template(self, name: str) -> "Template | None":
        return self.templates.get(name)

    def set_template(self, name: str, template: "Template | str") -> "Scope":
        if isinstance(template, str):
            from .template import Template

            template = Template.parse(template)
        self.templates[name] = template
        return self

    def render(self, name: str) -> str:
        """Render the named template with this scope.

        Raises:
            KeyError: No template is registered under ``name``.
        """
        template = self.template(name)
        if template is None:
            raise KeyError(f"template not found: {name}")
        return template.render(self)

    def __repr__(self) -> str:
        return (
            f"Scope(vars={list(self.vars)}, pipes={list(self.pipes)}, "
            f"funcs={list(self.funcs)}, templates={list(self.templates)})"
        )
