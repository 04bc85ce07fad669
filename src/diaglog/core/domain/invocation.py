"""
Invocation Descriptors

Read-only metadata about a single call crossing an instrumented boundary:
the target type, the method signature and the bound argument values. The
descriptors are built by the interception adapters and consumed by the
recorder; the core never mutates the arguments or the return value.
"""

from __future__ import annotations

import builtins
import collections.abc
import inspect
import typing
from dataclasses import dataclass, field, replace
from typing import Any, Annotated, Callable, Mapping, Optional

from diaglog.core.domain.errors import ContractViolationError


_AWAITABLE_ORIGINS = (
    collections.abc.Awaitable,
    collections.abc.Coroutine,
)


def _strip_annotated(annotation: Any) -> Any:
    """Return the underlying type of an ``Annotated[...]`` annotation."""
    if typing.get_origin(annotation) is Annotated:
        return typing.get_args(annotation)[0]
    return annotation


def _is_none_type(annotation: Any) -> bool:
    return annotation is None or annotation is type(None)


def is_void_annotation(annotation: Any) -> bool:
    """Check whether a return annotation declares no result.

    ``None`` is void. ``Awaitable[None]`` and ``Coroutine[Any, Any, None]``
    are async-void, and so is ``-> None`` on a coroutine function, whose
    annotation describes the awaited result. A missing annotation is never
    void.

    Args:
        annotation: The declared return annotation (``inspect.Signature.empty``
            when absent).

    Returns:
        True when the declared result is void or awaitable-void.
    """
    if annotation is inspect.Signature.empty:
        return False

    annotation = _strip_annotated(annotation)
    if _is_none_type(annotation):
        return True

    origin = typing.get_origin(annotation)
    if origin in _AWAITABLE_ORIGINS:
        args = typing.get_args(annotation)
        return bool(args) and _is_none_type(_strip_annotated(args[-1]))

    return False


@dataclass(frozen=True)
class ParameterDescriptor:
    """A single declared parameter of an intercepted method."""

    position: int
    name: str
    annotation: Any = inspect.Parameter.empty
    kind: Any = inspect.Parameter.POSITIONAL_OR_KEYWORD


@dataclass(frozen=True)
class ReturnDescriptor:
    """The return slot of an intercepted method."""

    annotation: Any = inspect.Signature.empty
    is_void: bool = False


class _AnnotationNamespace(dict):
    """Name lookup for evaluating one annotation string.

    Searches the owning class and its bases, the function's module and
    builtins in that order. Names found nowhere (e.g. imports guarded by
    ``TYPE_CHECKING``) evaluate to a ``typing.ForwardRef`` so the surrounding
    ``Annotated`` metadata is still recovered.
    """

    def __init__(self, *namespaces: Mapping[str, Any]) -> None:
        super().__init__()
        self._namespaces = namespaces

    def __missing__(self, name: str) -> Any:
        for namespace in self._namespaces:
            if name in namespace:
                return namespace[name]
        return typing.ForwardRef(name)


def _raw_annotations(target: Callable[..., Any]) -> dict[str, Any]:
    try:
        return dict(inspect.get_annotations(target))
    except NameError:
        # Deferred annotations (3.14+) naming undefined types.
        import annotationlib

        return dict(
            annotationlib.get_annotations(target, format=annotationlib.Format.STRING)
        )


def _resolved_hints(
    func: Callable[..., Any], owner: Optional[type] = None
) -> dict[str, Any]:
    """Resolve annotations one by one, keeping ``Annotated`` metadata.

    Each string annotation is evaluated on its own against the owning class
    namespace, the function's globals and builtins, so one unresolvable name
    only affects its own slot.

    Raises:
        ContractViolationError: If an ``Annotated`` annotation cannot be
            evaluated; it may carry a logging override that would otherwise
            be lost.
    """
    target = inspect.unwrap(getattr(func, "__func__", func))
    if owner is None:
        receiver = getattr(func, "__self__", None)
        if receiver is not None:
            owner = receiver if isinstance(receiver, type) else type(receiver)

    globalns = getattr(target, "__globals__", {})
    class_namespaces = [vars(klass) for klass in owner.__mro__] if owner is not None else []
    namespace = _AnnotationNamespace(*class_namespaces, globalns, vars(builtins))

    hints: dict[str, Any] = {}
    for name, annotation in _raw_annotations(target).items():
        if not isinstance(annotation, str):
            hints[name] = annotation
            continue
        try:
            hints[name] = eval(annotation, globalns, namespace)
        except Exception as exc:
            if "Annotated" in annotation:
                raise ContractViolationError(
                    f"Cannot evaluate annotation of {name!r} on "
                    f"{getattr(target, '__qualname__', target)!r}: {annotation}",
                    details={"annotation": annotation, "slot": name},
                ) from exc
            hints[name] = annotation
    return hints


@dataclass(frozen=True)
class MethodDescriptor:
    """Signature metadata of an intercepted method or function.

    ``parameters`` excludes the bound instance (``self``/``cls``) when the
    descriptor is built from a bound method.
    """

    function: Callable[..., Any]
    name: str
    parameters: tuple[ParameterDescriptor, ...] = ()
    returns: ReturnDescriptor = field(default_factory=ReturnDescriptor)
    signature: Optional[inspect.Signature] = field(default=None, compare=False, repr=False)

    @property
    def qualified_name(self) -> str:
        module = getattr(self.function, "__module__", "")
        qualname = getattr(self.function, "__qualname__", self.name)
        return f"{module}.{qualname}"

    @classmethod
    def from_callable(
        cls,
        func: Callable[..., Any],
        skip_receiver: bool = False,
        owner: Optional[type] = None,
    ) -> "MethodDescriptor":
        """Build a descriptor from a function, bound method or callable.

        Args:
            func: The callable to describe.
            skip_receiver: Drop the first declared parameter. Used for plain
                functions that are called as methods (``self`` or ``cls``).
            owner: Class whose namespace resolves string annotations. Taken
                from the receiver when ``func`` is a bound method.

        Returns:
            MethodDescriptor with parameters in declaration order.

        Raises:
            ContractViolationError: If an ``Annotated`` annotation cannot be
                evaluated.
        """
        signature = inspect.signature(func)
        if skip_receiver:
            signature = signature.replace(parameters=list(signature.parameters.values())[1:])
        hints = _resolved_hints(func, owner)
        function = getattr(func, "__func__", func)

        parameters = tuple(
            ParameterDescriptor(
                position=position,
                name=parameter.name,
                annotation=hints.get(parameter.name, parameter.annotation),
                kind=parameter.kind,
            )
            for position, parameter in enumerate(signature.parameters.values())
        )

        return_annotation = hints.get("return", signature.return_annotation)
        returns = ReturnDescriptor(
            annotation=return_annotation,
            is_void=is_void_annotation(return_annotation),
        )

        return cls(
            function=function,
            name=getattr(function, "__name__", type(function).__name__),
            parameters=parameters,
            returns=returns,
            signature=signature,
        )

    def bind_arguments(self, *args: Any, **kwargs: Any) -> tuple[Any, ...]:
        """Bind call arguments to the declared parameters, in order.

        Defaults are applied so every parameter has a value. ``*args`` and
        ``**kwargs`` parameters bind to a tuple and a dict respectively.

        Raises:
            TypeError: If the arguments do not match the signature.
        """
        signature = self.signature or inspect.signature(self.function)
        bound = signature.bind(*args, **kwargs)
        bound.apply_defaults()
        return tuple(bound.arguments[parameter.name] for parameter in self.parameters)


@dataclass(frozen=True)
class Invocation:
    """Descriptor of one call crossing the instrumented boundary."""

    target_type: Optional[type]
    method: MethodDescriptor
    arguments: tuple[Any, ...] = ()
    return_value: Any = None

    @property
    def namespace(self) -> str:
        if self.target_type is not None:
            return self.target_type.__module__
        return getattr(self.method.function, "__module__", "") or ""

    @property
    def type_name(self) -> str:
        if self.target_type is not None:
            return self.target_type.__name__
        return ""

    @property
    def method_name(self) -> str:
        return self.method.name

    @property
    def source(self) -> str:
        """Identity marker: ``diagnostic-<namespace>.<type>.<method>``."""
        parts = [self.namespace, self.type_name, self.method_name]
        return "diagnostic-" + ".".join(part for part in parts if part)

    def with_return_value(self, return_value: Any) -> "Invocation":
        return replace(self, return_value=return_value)
