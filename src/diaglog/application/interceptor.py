"""
Diagnostic Logging Interceptor

Boundary adapter between callers and instrumented code. Every call gets its
own InvocationRecorder; the pre-call phase runs before the real call and the
post-call phase after it returns. Calls that raise propagate unchanged and
produce no "ended" record.

Usage:
    interceptor = DiagnosticLoggingInterceptor(structlog.get_logger())

    @interceptor
    def transfer(source: str, target: str, amount: int) -> Receipt:
        ...

    service = interceptor.create_proxy(AccountService())
    service.login("alice", "s3cret")
"""

from __future__ import annotations

import inspect
from functools import wraps
from typing import Any, Awaitable, Callable, Optional, TypeVar

import structlog

from diaglog.application.recorder import InvocationRecorder
from diaglog.core.domain.enums import LogActive
from diaglog.core.domain.errors import require
from diaglog.core.domain.invocation import Invocation, MethodDescriptor
from diaglog.core.interfaces.logging import LoggerProtocol
from diaglog.core.interfaces.overrides import OverrideLookupProtocol
from diaglog.infrastructure.config import DiagnosticLoggingSettings
from diaglog.infrastructure.overrides import AttributeOverrideLookup, ChainedOverrideLookup

logger = structlog.get_logger(__name__)

T = TypeVar("T")
C = TypeVar("C", bound=type)


def _receiver_type(receiver: Any) -> type:
    return receiver if isinstance(receiver, type) else type(receiver)


def _declares_receiver(func: Callable[..., Any]) -> bool:
    parameters = list(inspect.signature(func).parameters.values())
    if not parameters:
        return False
    first = parameters[0]
    return first.name in ("self", "cls") and first.kind in (
        inspect.Parameter.POSITIONAL_ONLY,
        inspect.Parameter.POSITIONAL_OR_KEYWORD,
    )


class DiagnosticLoggingInterceptor:
    """Intercepts calls and records them through an InvocationRecorder.

    Args:
        logger: Sink for the diagnostic records. Required: a missing logger
            is a configuration error, not an implicit opt-out.
        override_lookup: Source of scope overrides. Defaults to the
            ``DiagnosticLogging`` markers declared on the code.
        default_class_state: State inherited by types without a class-level
            override.

    Raises:
        InvalidArgumentError: If logger is None.
    """

    def __init__(
        self,
        logger: LoggerProtocol,
        override_lookup: Optional[OverrideLookupProtocol] = None,
        default_class_state: LogActive = LogActive.OFF,
    ) -> None:
        self._logger = require(logger, "logger")
        self._lookup = override_lookup or AttributeOverrideLookup()
        self._default_class_state = default_class_state

    @classmethod
    def from_settings(
        cls,
        logger: LoggerProtocol,
        settings: DiagnosticLoggingSettings,
    ) -> "DiagnosticLoggingInterceptor":
        """Build an interceptor whose configured overrides take precedence
        over the markers declared on the code."""
        lookup = ChainedOverrideLookup([settings.build_registry(), AttributeOverrideLookup()])
        return cls(logger, lookup, default_class_state=settings.default_class_state)

    def create_recorder(self) -> InvocationRecorder:
        return InvocationRecorder(self._logger, self._lookup, self._default_class_state)

    def intercept(self, invocation: Invocation, proceed: Callable[[], T]) -> T:
        """Record a synchronous call around ``proceed``."""
        recorder = self.create_recorder()
        state = recorder.starting_invocation(invocation)
        result = proceed()
        recorder.completed_invocation(invocation.with_return_value(result), state)
        return result

    async def intercept_async(
        self, invocation: Invocation, proceed: Callable[[], Awaitable[T]]
    ) -> T:
        """Record an asynchronous call around the awaited ``proceed``."""
        recorder = self.create_recorder()
        state = recorder.starting_invocation(invocation)
        result = await proceed()
        recorder.completed_invocation(invocation.with_return_value(result), state)
        return result

    def wrap(
        self,
        func: Callable[..., Any],
        target_type: Optional[type] = None,
        has_receiver: bool = False,
    ) -> Callable[..., Any]:
        """Wrap a function so each call is intercepted.

        Args:
            func: Function or coroutine function to wrap.
            target_type: Type reported as the call target. Ignored when
                ``has_receiver`` is set.
            has_receiver: The first positional argument is ``self`` or
                ``cls``; it is excluded from the logged arguments and its type
                becomes the call target.

        Returns:
            A wrapper with the same calling convention as ``func``.
        """

        def build_invocation(args: tuple[Any, ...], kwargs: dict[str, Any]) -> Invocation:
            if has_receiver:
                receiver_type = _receiver_type(args[0])
                method = MethodDescriptor.from_callable(
                    func, skip_receiver=True, owner=receiver_type
                )
                return Invocation(
                    target_type=receiver_type,
                    method=method,
                    arguments=method.bind_arguments(*args[1:], **kwargs),
                )
            method = MethodDescriptor.from_callable(func, owner=target_type)
            return Invocation(
                target_type=target_type,
                method=method,
                arguments=method.bind_arguments(*args, **kwargs),
            )

        if inspect.iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                invocation = build_invocation(args, kwargs)
                return await self.intercept_async(invocation, lambda: func(*args, **kwargs))

            return async_wrapper

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            invocation = build_invocation(args, kwargs)
            return self.intercept(invocation, lambda: func(*args, **kwargs))

        return wrapper

    def __call__(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Decorator form of ``wrap``.

        A function whose first parameter is ``self`` or ``cls`` is treated as
        a method: the receiver is left out of the logged arguments and its
        type becomes the call target. Apply it below ``@classmethod`` or
        ``@staticmethod``, directly on the function.
        """
        return self.wrap(func, has_receiver=_declares_receiver(func))

    def intercept_class(self, cls: C) -> C:
        """Class decorator intercepting every public method of ``cls``.

        Instance methods, class methods and static methods declared on the
        class itself are wrapped in place; inherited methods are not.
        """
        for name, member in list(vars(cls).items()):
            if name.startswith("_"):
                continue
            if isinstance(member, staticmethod):
                wrapped = staticmethod(self.wrap(member.__func__, target_type=cls))
            elif isinstance(member, classmethod):
                wrapped = classmethod(self.wrap(member.__func__, has_receiver=True))
            elif inspect.isfunction(member):
                wrapped = self.wrap(member, has_receiver=True)
            else:
                continue
            setattr(cls, name, wrapped)

        logger.debug("class_intercepted", target_type=cls.__qualname__)
        return cls

    def create_proxy(self, target: Any) -> "InterceptedProxy":
        """Wrap an object so calls to its public methods are intercepted."""
        require(target, "target")
        logger.debug("proxy_created", target_type=type(target).__qualname__)
        return InterceptedProxy(target, self)


class InterceptedProxy:
    """Forwards attribute access to a target, intercepting public methods.

    Private attributes (leading underscore) and non-callable attributes are
    returned unchanged.
    """

    __slots__ = ("_target", "_interceptor")

    def __init__(self, target: Any, interceptor: DiagnosticLoggingInterceptor) -> None:
        object.__setattr__(self, "_target", target)
        object.__setattr__(self, "_interceptor", interceptor)

    def __getattr__(self, name: str) -> Any:
        attribute = getattr(self._target, name)
        if name.startswith("_") or not callable(attribute) or inspect.isclass(attribute):
            return attribute
        if inspect.ismethod(attribute):
            return self._intercept_bound(attribute)
        return self._interceptor.wrap(attribute, target_type=type(self._target))

    def __setattr__(self, name: str, value: Any) -> None:
        setattr(self._target, name, value)

    def __repr__(self) -> str:
        return f"InterceptedProxy({self._target!r})"

    def _intercept_bound(self, bound: Any) -> Callable[..., Any]:
        interceptor = self._interceptor
        target_type = _receiver_type(bound.__self__)

        def build_invocation(args: tuple[Any, ...], kwargs: dict[str, Any]) -> Invocation:
            method = MethodDescriptor.from_callable(bound)
            return Invocation(
                target_type=target_type,
                method=method,
                arguments=method.bind_arguments(*args, **kwargs),
            )

        if inspect.iscoroutinefunction(bound):

            @wraps(bound)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                invocation = build_invocation(args, kwargs)
                return await interceptor.intercept_async(invocation, lambda: bound(*args, **kwargs))

            return async_wrapper

        @wraps(bound)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            invocation = build_invocation(args, kwargs)
            return interceptor.intercept(invocation, lambda: bound(*args, **kwargs))

        return wrapper
