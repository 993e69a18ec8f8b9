"""Type introspection via runtime reflection.

Reads parameter types from ``inspect.signature`` and
``typing.get_type_hints``. Rules:

- a class annotation names the binding by its qualified name
- ``Optional[T]``, ``T | None`` or a default of None makes it nullable
- a ``NewType`` names the binding by the NewType's own qualified name
- a string annotation that cannot be evaluated is used verbatim
- builtins (``int``, ``str``, ``dict``...), ``Any``, generic aliases and
  unions of several types are not injectable
- ``*args`` and ``**kwargs`` are not reported
"""

from __future__ import annotations

import builtins
import functools
import inspect
import pkgutil
import re
import types
import typing
from typing import Any, Union, get_args, get_origin, get_type_hints

from jest_injector.domain.value_objects import TypeId, type_id_of
from jest_injector.ports.inbound import InvalidCallableError
from jest_injector.ports.outbound import ParameterKind, ParameterSpec, TargetInfo

_OPTIONAL_TEXT = re.compile(r"^(?:typing\.)?Optional\[(?P<inner>.+)\]$")
_UNION_TYPES: tuple[Any, ...] = (Union, types.UnionType)


def classify_annotation(annotation: Any) -> tuple[TypeId | None, bool]:
    """Map an annotation to ``(type_id, nullable)``.

    ``type_id`` is None when the annotation names nothing injectable.
    """
    if annotation is None or annotation is inspect.Parameter.empty or annotation is Any:
        return None, False

    if isinstance(annotation, str):
        return _classify_text(annotation)

    if isinstance(annotation, typing.ForwardRef):
        return _classify_text(annotation.__forward_arg__)

    origin = get_origin(annotation)
    if origin in _UNION_TYPES:
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        nullable = len(members) != len(get_args(annotation))
        if len(members) != 1:
            return None, nullable
        type_id, _ = classify_annotation(members[0])
        return type_id, nullable

    if origin is not None:
        return None, False

    if hasattr(annotation, "__supertype__"):
        return TypeId(f"{annotation.__module__}.{annotation.__qualname__}"), False

    if isinstance(annotation, type):
        if annotation.__module__ == "builtins":
            return None, False
        return type_id_of(annotation), False

    return None, False


def _classify_text(text: str) -> tuple[TypeId | None, bool]:
    text = text.strip().strip("'\"")
    nullable = False

    match = _OPTIONAL_TEXT.match(text)
    if match:
        text, nullable = match.group("inner").strip(), True
    elif "|" in text:
        members = [part.strip() for part in text.split("|")]
        non_null = [part for part in members if part != "None"]
        nullable = len(non_null) != len(members)
        if len(non_null) != 1:
            return None, nullable
        text = non_null[0]

    if not text or text == "Any" or hasattr(builtins, text):
        return None, nullable
    if "[" in text:
        return None, nullable
    return TypeId(text), nullable


class ReflectionIntrospector:
    """Reads declared parameter types from Python annotations."""

    def parameters(self, target: Any) -> list[ParameterSpec]:
        """Return the ordered injectable parameters of a target.

        Classes without their own ``__init__`` or ``__new__`` report no
        parameters.

        Raises:
            InvalidCallableError: If no signature can be read.
        """
        if isinstance(target, type) and not _has_constructor(target):
            return []

        try:
            signature = inspect.signature(target)
        except (TypeError, ValueError) as exc:
            raise InvalidCallableError(target, "has no readable signature") from exc

        hints = _type_hints(target)
        bound = target.keywords if isinstance(target, functools.partial) else {}
        specs: list[ParameterSpec] = []
        for name, param in signature.parameters.items():
            if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
                continue
            if name in bound:
                continue

            annotation = hints.get(name, param.annotation)
            if annotation is inspect.Parameter.empty:
                annotation = None
            type_id, nullable = classify_annotation(annotation)
            if param.default is None:
                nullable = True

            kind = (
                ParameterKind.KEYWORD
                if param.kind is inspect.Parameter.KEYWORD_ONLY
                else ParameterKind.POSITIONAL
            )
            specs.append(
                ParameterSpec(
                    name=name,
                    type_id=type_id,
                    nullable=nullable,
                    kind=kind,
                    annotation=annotation,
                )
            )
        return specs

    def target_info(self, target: type | str) -> TargetInfo:
        """Describe whether a target can be instantiated."""
        if isinstance(target, str):
            try:
                target = self.load(target)
            except LookupError:
                return TargetInfo(cls=None, exists=False, instantiable=False, reason="does not exist")

        if not isinstance(target, type):
            return TargetInfo(cls=None, exists=True, instantiable=False, reason="is not a class")
        if getattr(target, "_is_protocol", False):
            return TargetInfo(cls=target, exists=True, instantiable=False, reason="is a protocol")
        if inspect.isabstract(target):
            return TargetInfo(cls=target, exists=True, instantiable=False, reason="is abstract")
        return TargetInfo(cls=target, exists=True, instantiable=True)

    def load(self, path: str) -> Any:
        """Import an object from ``pkg.mod.name``, ``pkg.mod:Name.attr``
        or ``pkg.mod.Class::method``.

        Raises:
            LookupError: If nothing importable has that name.
        """
        normalized = path.strip().replace("::", ".")
        try:
            return pkgutil.resolve_name(normalized)
        except (ImportError, AttributeError, ValueError) as exc:
            raise LookupError(f"Cannot import {path!r}") from exc


def _has_constructor(cls: type) -> bool:
    return cls.__init__ is not object.__init__ or cls.__new__ is not object.__new__


def _type_hints(target: Any) -> dict[str, Any]:
    if isinstance(target, functools.partial):
        holder = target.func
    elif isinstance(target, type):
        holder = target.__init__ if target.__init__ is not object.__init__ else target.__new__
    elif inspect.isfunction(target) or inspect.ismethod(target):
        holder = target
    else:
        holder = getattr(type(target), "__call__", target)

    try:
        return get_type_hints(holder)
    except (NameError, TypeError, AttributeError, SyntaxError):
        return _evaluate_each(holder)


def _evaluate_each(holder: Any) -> dict[str, Any]:
    """Evaluate annotations one at a time.

    An annotation that cannot be evaluated is left out, so the caller
    falls back to its raw text for that parameter alone.
    """
    func = inspect.unwrap(getattr(holder, "__func__", holder))
    annotations = getattr(func, "__annotations__", None) or {}
    namespace = getattr(func, "__globals__", {})

    hints: dict[str, Any] = {}
    for name, annotation in annotations.items():
        if isinstance(annotation, str):
            try:
                annotation = eval(annotation, namespace)  # noqa: S307
            except (NameError, TypeError, AttributeError, SyntaxError):
                continue
        hints[name] = annotation
    return hints
