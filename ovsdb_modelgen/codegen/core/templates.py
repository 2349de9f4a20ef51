"""
Template engine wrapper for code generation.

A ModelTemplate is a Jinja2 skeleton plus a fixed set of named hooks that
callers can redefine. Every hook is an included template, so it renders
against the same context as the skeleton. The data for a render lives in
a TemplateContext.
"""

from collections.abc import MutableMapping
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, Iterable, Mapping, Optional, Tuple

from jinja2 import (
    DictLoader,
    Environment,
    StrictUndefined,
    TemplateSyntaxError,
)
from jinja2 import TemplateError as Jinja2Error

from ...logging_config import get_logger

logger = get_logger(__name__)


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


class HookParseError(TemplateError):
    """Raised when a hook definition is not valid template syntax."""

    def __init__(self, hook: str, error: TemplateSyntaxError):
        self.hook = hook
        self.lineno = error.lineno
        super().__init__(
            f"Failed to parse hook '{hook}' (line {error.lineno}): {error.message}"
        )


class RenderError(TemplateError):
    """Raised when rendering a template against its context fails."""

    pass


@dataclass(frozen=True)
class FieldSpec:
    """One generated struct field."""

    name: str  # Exported identifier
    type: str  # Target type expression
    tag: str  # Original column name, unmodified


class TemplateContext(MutableMapping):
    """
    Ordered key/value data passed to every section of a template.

    The base keys set by the builders are ``package_name``, ``table_name``,
    ``struct_name``, ``fields`` and ``tag_key``. Callers may add any other
    key before rendering.
    """

    BASE_KEYS = ("package_name", "table_name", "struct_name", "fields", "tag_key")

    def __init__(self, data: Optional[Mapping[str, Any]] = None, **kwargs: Any):
        self._data: Dict[str, Any] = {}
        self.update(data or {}, **kwargs)

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._data[key] = value

    def __delitem__(self, key: str) -> None:
        del self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"TemplateContext({self._data!r})"

    @property
    def struct_name(self) -> Optional[str]:
        return self._data.get("struct_name")

    @property
    def table_name(self) -> Optional[str]:
        return self._data.get("table_name")

    @property
    def fields(self) -> Tuple[FieldSpec, ...]:
        return self._data.get("fields", ())

    def snapshot(self) -> Dict[str, Any]:
        """Return a shallow copy of the current data for rendering."""
        return dict(self._data)


class ModelTemplate:
    """A skeleton template with named, redefinable hooks."""

    def __init__(
        self,
        name: str,
        skeleton: str,
        hooks: Iterable[str] = (),
        filters: Optional[Dict[str, Callable[..., Any]]] = None,
    ):
        """
        Initialize the template.

        Args:
            name: Template name, also the name of the skeleton section
            skeleton: Jinja2 source of the fixed skeleton
            hooks: Names of the hook sections, each empty by default
            filters: Extra Jinja2 filters available to every section

        Raises:
            TemplateError: If the skeleton does not parse
        """
        self.name = name
        self.hooks = tuple(hooks)
        self._filters = dict(filters or {})
        self._sources: Dict[str, str] = {name: skeleton}
        self._sources.update({hook: "" for hook in self.hooks})

        # cache_size=0 so a redefined hook is always picked up
        self._env = Environment(
            loader=DictLoader(self._sources),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
            cache_size=0,
        )
        self._env.filters.update(self._filters)

        try:
            self._env.parse(skeleton)
        except TemplateSyntaxError as e:
            raise TemplateError(f"Invalid skeleton for template {name}: {e}") from e

    def define(self, hook: str, source: str) -> None:
        """
        Replace the content of a hook.

        The source is parsed right away so syntax errors surface here and
        not at render time.

        Args:
            hook: Hook name, one of ``self.hooks``
            source: Jinja2 source for the hook

        Raises:
            TemplateError: If the hook name is unknown
            HookParseError: If the source is not valid template syntax
        """
        if hook not in self.hooks:
            raise TemplateError(
                f"Template {self.name} has no hook '{hook}'. "
                f"Available: {', '.join(self.hooks) or 'none'}"
            )

        try:
            self._env.parse(source)
        except TemplateSyntaxError as e:
            raise HookParseError(hook, e) from e

        self._sources[hook] = source
        logger.debug("Defined hook %s on template %s", hook, self.name)

    def hook_source(self, hook: str) -> str:
        """Get the current source of a hook."""
        if hook not in self.hooks:
            raise TemplateError(f"Template {self.name} has no hook '{hook}'")
        return self._sources[hook]

    def render(self, context: Mapping[str, Any]) -> str:
        """
        Render the skeleton and hooks against a context.

        Args:
            context: Template data; it is copied, never modified

        Returns:
            Rendered text

        Raises:
            RenderError: If rendering fails
        """
        data = dict(context)
        try:
            return self._env.get_template(self.name).render(data)
        except Jinja2Error as e:
            raise RenderError(f"Failed to render template {self.name}: {e}") from e
