"""Markup templating interpreter for setupdoc documents.

The DSL is deliberately small.  A template is rendered against a context
mapping in five ordered passes, each feeding the next:

1. Partials       ``{{> name}}``
2. Conditionals   ``{{#if path}} ... {{else}} ... {{/if}}`` (nestable)
3. Loops          ``{{#each path}} ... {{/each}}`` (not nestable)
4. Variables      ``{{path.to.value}}`` and ``{{@index}}``
5. Helpers        ``{{helper arg "literal" 3}}``

Rendering never raises on bad input: unresolved variables become empty
strings and unknown partials or helpers are left in the output verbatim.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Callable, Optional

from setupdoc.errors import TemplateLoadError
from setupdoc.utils import read_text


Helper = Callable[..., Any]

_PARTIAL_RE = re.compile(r"\{\{>\s*(\w+)\s*\}\}")
_IF_OPEN_RE = re.compile(r"\{\{#if\s+([^}]+)\}\}")
_EACH_RE = re.compile(r"\{\{#each\s+([^}]+)\}\}(.*?)\{\{/each\}\}", re.DOTALL)
_VARIABLE_RE = re.compile(r"\{\{(@?[A-Za-z_][A-Za-z0-9_]*(?:\.[A-Za-z0-9_]+)*)\}\}")
_HELPER_RE = re.compile(r"\{\{(\w+)\s+([^}]+)\}\}")
_PATH_ARG_RE = re.compile(r"^[A-Za-z@]")
_INT_ARG_RE = re.compile(r"^\d+$")

_IF_TOKEN = "{{#if"
_ELSE_TOKEN = "{{else}}"
_ENDIF_TOKEN = "{{/if}}"

# Template text keyed by path.  Shared by every engine unless one is given
# its own cache; only clear_cache() ever empties it.
_TEMPLATE_CACHE: dict[str, str] = {}


# ---------------------------------------------------------------------------
# TemplateEngine
# ---------------------------------------------------------------------------


class TemplateEngine:
    """Parses and renders setupdoc markup against a context mapping.

    Helpers (``name -> callable``) and partials (``name -> template text``)
    are open extension points; the built-in helpers are ``if``, ``unless``,
    ``each``, ``join``, ``uppercase`` and ``lowercase``.
    """

    def __init__(self, cache: Optional[dict[str, str]] = None) -> None:
        self._cache = _TEMPLATE_CACHE if cache is None else cache
        self.helpers: dict[str, Helper] = {}
        self.partials: dict[str, str] = {}
        self._active_partials: list[str] = []

        self.register_helper("if", _if_helper)
        self.register_helper("unless", _unless_helper)
        self.register_helper("each", _each_helper)
        self.register_helper("join", _join_helper)
        self.register_helper("uppercase", _uppercase_helper)
        self.register_helper("lowercase", _lowercase_helper)

    # -- Registration --------------------------------------------------------

    def register_helper(self, name: str, fn: Helper) -> None:
        self.helpers[name] = fn

    def register_partial(self, name: str, template: str) -> None:
        self.partials[name] = template

    # -- Loading -------------------------------------------------------------

    async def load_template(self, template_path: str | Path) -> str:
        """Return the text at *template_path*, reading it at most once.

        Raises:
            TemplateLoadError: If the file cannot be read.
        """
        key = str(template_path)
        if key in self._cache:
            return self._cache[key]
        try:
            template = await read_text(template_path)
        except (OSError, UnicodeDecodeError) as exc:
            raise TemplateLoadError(key, str(exc)) from exc
        self._cache[key] = template
        return template

    async def render_file(
        self, template_path: str | Path, context: Optional[Mapping[str, Any]] = None
    ) -> str:
        template = await self.load_template(template_path)
        return self.render(template, context)

    def clear_cache(self) -> None:
        self._cache.clear()

    def cache_stats(self) -> dict[str, int]:
        return {
            "templates_cached": len(self._cache),
            "helper_count": len(self.helpers),
            "partial_count": len(self.partials),
        }

    # -- Rendering -----------------------------------------------------------

    def render(self, template: str, context: Optional[Mapping[str, Any]] = None) -> str:
        """Render *template* against *context* through all five passes."""
        ctx: Mapping[str, Any] = context if context is not None else {}
        result = self._render_partials(template, ctx)
        result = self._render_conditionals(result, ctx)
        result = self._render_loops(result, ctx)
        result = self._render_variables(result, ctx)
        result = self._render_helpers(result, ctx)
        return result

    def _render_partials(self, template: str, context: Mapping[str, Any]) -> str:
        def _replace(match: re.Match[str]) -> str:
            name = match.group(1)
            partial = self.partials.get(name)
            # A partial that (indirectly) includes itself stays literal.
            if partial is None or name in self._active_partials:
                return match.group(0)
            self._active_partials.append(name)
            try:
                return self.render(partial, context)
            finally:
                self._active_partials.pop()

        return _PARTIAL_RE.sub(_replace, template)

    def _render_conditionals(self, template: str, context: Mapping[str, Any]) -> str:
        result = template
        search_from = 0
        while True:
            opening = _IF_OPEN_RE.search(result, search_from)
            if opening is None:
                return result

            block = _match_if_block(result, opening.end())
            if block is None:
                # Unclosed; a nested block further on may still close.
                search_from = opening.end()
                continue

            else_pos, endif_pos = block
            if else_pos is None:
                then_part = result[opening.end():endif_pos]
                else_part = ""
            else:
                then_part = result[opening.end():else_pos]
                else_part = result[else_pos + len(_ELSE_TOKEN):endif_pos]

            value = self.get_value(opening.group(1).strip(), context)
            branch = then_part if _is_truthy(value) else else_part
            rendered = self.render(branch, context)

            result = result[:opening.start()] + rendered + result[endif_pos + len(_ENDIF_TOKEN):]
            search_from = opening.start() + len(rendered)

    def _render_loops(self, template: str, context: Mapping[str, Any]) -> str:
        def _replace(match: re.Match[str]) -> str:
            items = self.get_value(match.group(1).strip(), context)
            if not isinstance(items, (list, tuple)):
                return ""
            body = match.group(2)
            length = len(items)
            parts: list[str] = []
            for index, item in enumerate(items):
                item_context: dict[str, Any] = {
                    **context,
                    "this": item,
                    "@index": index,
                    "@first": index == 0,
                    "@last": index == length - 1,
                    "@length": length,
                }
                if isinstance(item, Mapping):
                    item_context.update(item)
                parts.append(self.render(body, item_context))
            return "".join(parts)

        return _EACH_RE.sub(_replace, template)

    def _render_variables(self, template: str, context: Mapping[str, Any]) -> str:
        def _replace(match: re.Match[str]) -> str:
            return _to_text(self.get_value(match.group(1), context))

        return _VARIABLE_RE.sub(_replace, template)

    def _render_helpers(self, template: str, context: Mapping[str, Any]) -> str:
        def _replace(match: re.Match[str]) -> str:
            helper = self.helpers.get(match.group(1))
            if helper is None:
                return match.group(0)
            result = helper(*self.parse_helper_args(match.group(2), context))
            return _to_text(result) if result else ""

        return _HELPER_RE.sub(_replace, template)

    # -- Value resolution ----------------------------------------------------

    def get_value(self, path: str, context: Mapping[str, Any]) -> Any:
        """Resolve a dotted *path* against *context*; ``None`` when missing.

        ``this`` is bound only inside an ``{{#each}}`` block.
        """
        if path == "this":
            return context.get("this")
        if path.startswith("@"):
            return context.get(path)

        value: Any = context
        for key in path.split("."):
            if isinstance(value, Mapping) and key in value:
                value = value[key]
            elif isinstance(value, (list, tuple)) and key.isdigit() and int(key) < len(value):
                value = value[int(key)]
            else:
                return None
        return value

    def parse_helper_args(self, args: str, context: Mapping[str, Any]) -> list[Any]:
        """Tokenize a helper argument string and resolve each token.

        Quoted spans are literal strings.  Unquoted tokens starting with a
        letter or ``@`` are context paths, all-digit tokens are integers,
        anything else is a literal string.
        """
        tokens: list[tuple[str, bool]] = []
        current = ""
        quote: Optional[str] = None

        for char in args:
            if quote is None and char in ("'", '"'):
                if current:
                    tokens.append((current, False))
                    current = ""
                quote = char
            elif quote is not None and char == quote:
                tokens.append((current, True))
                current = ""
                quote = None
            elif quote is None and char.isspace():
                if current:
                    tokens.append((current, False))
                    current = ""
            else:
                current += char

        if current:
            tokens.append((current, quote is not None))

        values: list[Any] = []
        for token, quoted in tokens:
            if quoted:
                values.append(token)
            elif _PATH_ARG_RE.match(token):
                values.append(self.get_value(token, context))
            elif _INT_ARG_RE.match(token):
                values.append(int(token))
            else:
                values.append(token)
        return values


# ---------------------------------------------------------------------------
# Block scanning
# ---------------------------------------------------------------------------


def _match_if_block(text: str, start: int) -> Optional[tuple[Optional[int], int]]:
    """Find the ``{{else}}`` and ``{{/if}}`` closing the block opened before *start*.

    Returns ``(else_pos, endif_pos)``; ``else_pos`` is ``None`` when the
    block has no top-level ``{{else}}``.  Returns ``None`` when the block is
    never closed.
    """
    depth = 1
    else_pos: Optional[int] = None
    pos = start

    while True:
        found: list[tuple[int, str]] = []
        for token in (_IF_TOKEN, _ELSE_TOKEN, _ENDIF_TOKEN):
            index = text.find(token, pos)
            if index != -1:
                found.append((index, token))
        if not found:
            return None

        index, token = min(found)
        if token == _IF_TOKEN:
            depth += 1
        elif token == _ELSE_TOKEN:
            if depth == 1 and else_pos is None:
                else_pos = index
        else:
            depth -= 1
            if depth == 0:
                return else_pos, index
        pos = index + len(token)


# ---------------------------------------------------------------------------
# Value helpers
# ---------------------------------------------------------------------------


def _is_truthy(value: Any) -> bool:
    if isinstance(value, (list, tuple, set, frozenset)):
        return len(value) > 0
    return bool(value)


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(_to_text(item) for item in value)
    return str(value)


# ---------------------------------------------------------------------------
# Built-in helpers
# ---------------------------------------------------------------------------


def _if_helper(condition: Any = None, *_: Any) -> str:
    return "true" if _is_truthy(condition) else ""


def _unless_helper(condition: Any = None, *_: Any) -> str:
    return "" if _is_truthy(condition) else "true"


def _each_helper(items: Any = None, template: Any = "", *_: Any) -> str:
    """Inline, non-block iteration: substitute ``{{this}}`` in *template*."""
    if not isinstance(items, (list, tuple)):
        return ""
    return "".join(str(template).replace("{{this}}", _to_text(item)) for item in items)


def _join_helper(items: Any = None, separator: Any = ", ", *_: Any) -> str:
    if not isinstance(items, (list, tuple)):
        return ""
    return _to_text(separator).join(_to_text(item) for item in items)


def _uppercase_helper(value: Any = None, *_: Any) -> str:
    return _to_text(value).upper()


def _lowercase_helper(value: Any = None, *_: Any) -> str:
    return _to_text(value).lower()
