"""
Render gleam components into embeddable HTML.

Two modes share the same output shape: a container div that the page
framework must leave alone (``phx-update="ignore"``), followed by the module
script that loads ``gleam/<module>.entry.mjs`` and a JSON script block
(``id="ls-model"``) the client reads its starting state from.

- render_client_only(): empty container, the raw flags as JSON. No component
  code runs on the server.
- render_server_side(): calls the component's init(flags) and view(model),
  renders the view into the container and embeds the model, so the client
  hydrates from server state instead of re-deriving it.

Both functions are pure and keep no state between calls.
"""

import dataclasses
import importlib
import json
from types import ModuleType
from typing import Any, Callable, Optional, Union

from .element import Element, Node, attribute, div, id_, to_string

MODEL_ELEMENT_ID = "ls-model"
IGNORE_ATTRIBUTE = attribute("phx-update", "ignore")
ENTRY_PATH_TEMPLATE = "gleam/{module_name}.entry.mjs"

FunctionRef = Union[str, Callable[..., Any]]

# Keeps the payload from closing the surrounding <script> tag
_SCRIPT_ESCAPES = {"<": "\\u003c", ">": "\\u003e", "&": "\\u0026"}


def _json_default(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def to_json(payload: Any) -> str:
    """Serialize a payload for embedding inside a script tag."""
    encoded = json.dumps(payload, separators=(",", ":"), default=_json_default)
    for char, escape in _SCRIPT_ESCAPES.items():
        encoded = encoded.replace(char, escape)
    return encoded


def wrap_in_container(content: Optional[Node], target_id: str) -> Element:
    children = () if content is None else (content,)
    return div([id_(target_id), IGNORE_ATTRIBUTE], children)


def script_tags(html: str, module_name: str, payload: Any) -> str:
    """Append the entry module script and the JSON state block to html."""
    src = ENTRY_PATH_TEMPLATE.format(module_name=module_name)
    return (
        f"{html}"
        f'<script type="module" src="{src}"></script>\n'
        f'<script type="application/json" id="{MODEL_ELEMENT_ID}">{to_json(payload)}</script>\n'
    )


def render_client_only(module_name: str, target_id: str, flags: Any) -> str:
    """Render the mount point for a component that starts on the client.

    Args:
        module_name: Compiled module name; the page loads gleam/<module_name>.entry.mjs
        target_id: id of the container element
        flags: Initial flags handed to the client as JSON

    Returns:
        HTML fragment
    """
    return script_tags(to_string(wrap_in_container(None, target_id)), module_name, flags)


def _resolve(component: Any, ref: FunctionRef) -> Callable[..., Any]:
    if callable(ref):
        return ref
    return getattr(component, ref)


def render_server_side(
    module_name: str,
    init_fn: FunctionRef,
    view_fn: FunctionRef,
    target_id: str,
    flags: Any,
    component: Optional[Union[ModuleType, Any]] = None,
) -> str:
    """Render a component on the server.

    Calls ``init_fn(flags)``, which must return ``(effects, model)``, then
    ``view_fn(model)``. Effects are client-side work and are dropped here.
    A missing module or function raises the usual import/attribute error.

    Args:
        module_name: Compiled module name; also imported when component is None
        init_fn: Init function, or its attribute name on the component
        view_fn: View function, or its attribute name on the component
        target_id: id of the container element
        flags: Flags passed to init
        component: Object exposing init/view (defaults to importing module_name)

    Returns:
        HTML fragment with the rendered view and the model embedded as JSON
    """
    if component is None and not (callable(init_fn) and callable(view_fn)):
        component = importlib.import_module(module_name)

    init = _resolve(component, init_fn)
    view = _resolve(component, view_fn)

    _effects, model = init(flags)
    tree = view(model)

    return script_tags(to_string(wrap_in_container(tree, target_id)), module_name, model)
