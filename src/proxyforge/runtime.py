"""Runtime support shared by every generated proxy type."""

from collections.abc import Callable
from typing import ClassVar

from proxyforge.conversion import ArgumentMatcher
from proxyforge.conversion import ReturnConverter
from proxyforge.conversion import build_argument_matchers
from proxyforge.errors import NoMatchingOverload
from proxyforge.handler import CallHandler
from proxyforge.handler import validate_handler
from proxyforge.members import MemberDescriptor

CallArguments = tuple[tuple[object, ...], dict[str, object]]


class ForwardingTarget:
    """One member declaration reachable from a proxy attribute."""

    member: MemberDescriptor
    converter: ReturnConverter
    matchers: tuple[ArgumentMatcher, ...]

    def __init__(self, member: MemberDescriptor, is_overloaded: bool) -> None:
        """Compile conversion for one member.

        :param member: Member the target forwards.
        :param is_overloaded: Whether arguments must be matched against types.
        """
        self.member = member
        self.converter = ReturnConverter(member)
        self.matchers = ()
        if is_overloaded is True:
            self.matchers = build_argument_matchers(member)

    def bind(self, args: tuple[object, ...], kwargs: dict[str, object]) -> tuple[object, ...]:
        """Pack call arguments in declared parameter order.

        :param args: Positional arguments.
        :param kwargs: Keyword arguments.
        :returns: Argument values with defaults applied.
        :raises TypeError: If the arguments do not fit the signature.
        """
        bound = self.member.signature.bind(*args, **kwargs)
        bound.apply_defaults()
        return tuple(bound.arguments.values())

    def accepts(self, values: tuple[object, ...]) -> bool:
        """Check packed arguments against the declared parameter types.

        :param values: Packed argument values.
        :returns: ``True`` when every value fits; always ``True`` for members
            that are not overloaded.
        """
        for matcher, value in zip(self.matchers, values):
            if matcher.accepts(value) is False:
                return False
        return True

    def index_arguments(self, key: object, trailing: tuple[object, ...]) -> tuple[object, ...]:
        """Spread a subscription key over the declared index parameters.

        :param key: Key passed to ``[]``.
        :param trailing: Values following the index, such as the assigned value.
        :returns: Positional arguments for :meth:`bind`.
        """
        index_arity: int = len(self.member.parameter_types) - len(trailing)
        if index_arity > 1 and isinstance(key, tuple) is True:
            return (*key, *trailing)
        return (key, *trailing)

    def invoke(self, instance: "InterfaceProxyBase", values: tuple[object, ...]) -> object:
        """Hand one call to the bound handler and convert its result.

        :param instance: Proxy instance the call was made on.
        :param values: Packed argument values.
        :returns: Converted result, or ``None`` for members without a value.
        """
        handler: CallHandler = object.__getattribute__(instance, "_call_handler")
        result: object = handler.handle_call(self.member, values)
        if self.member.returns_value is False:
            return None
        return self.converter.convert(result)


def _forward(
    instance: "InterfaceProxyBase",
    targets: tuple[ForwardingTarget, ...],
    arguments_for: Callable[[ForwardingTarget], CallArguments],
) -> object:
    """Invoke the single target, or the first overload accepting the arguments.

    :param instance: Proxy instance.
    :param targets: Declarations sharing one attribute, in declaration order.
    :param arguments_for: Builds the call arguments for one target.
    :returns: Converted handler result.
    :raises NoMatchingOverload: If no overload accepts the arguments.
    """
    if len(targets) == 1:
        target: ForwardingTarget = targets[0]
        args, kwargs = arguments_for(target)
        return target.invoke(instance, target.bind(args, kwargs))

    for candidate in targets:
        args, kwargs = arguments_for(candidate)
        try:
            values: tuple[object, ...] = candidate.bind(args, kwargs)
        except TypeError:
            continue
        if candidate.accepts(values) is True:
            return candidate.invoke(instance, values)

    args, kwargs = arguments_for(targets[0])
    raise NoMatchingOverload(targets[0].member.attribute_name, args, kwargs)


def forward_call(
    instance: "InterfaceProxyBase",
    targets: tuple[ForwardingTarget, ...],
    args: tuple[object, ...],
    kwargs: dict[str, object],
) -> object:
    """Forward a method or accessor call to the first matching declaration.

    :param instance: Proxy instance.
    :param targets: Declarations sharing the called attribute, in order.
    :param args: Positional arguments.
    :param kwargs: Keyword arguments.
    :returns: Converted handler result.
    :raises NoMatchingOverload: If no overload accepts the arguments.
    """
    return _forward(instance, targets, lambda target: (args, kwargs))


def forward_index(
    instance: "InterfaceProxyBase",
    targets: tuple[ForwardingTarget, ...],
    key: object,
    trailing: tuple[object, ...] = (),
) -> object:
    """Forward an indexer access.

    :param instance: Proxy instance.
    :param targets: ``get_Item`` or ``set_Item`` declarations.
    :param key: Subscription key.
    :param trailing: Assigned value for ``set_Item``.
    :returns: Converted handler result.
    """
    return _forward(instance, targets, lambda target: (target.index_arguments(key, trailing), {}))


class BoundEvent:
    """Event of one proxy instance, changed with ``+=`` and ``-=``."""

    _instance: "InterfaceProxyBase"
    _accessor: "EventAccessor"

    def __init__(self, instance: "InterfaceProxyBase", accessor: "EventAccessor") -> None:
        """Bind an event accessor to one proxy instance.

        :param instance: Proxy instance.
        :param accessor: Class-level accessor of the event.
        """
        self._instance = instance
        self._accessor = accessor

    def belongs_to(self, instance: "InterfaceProxyBase", accessor: "EventAccessor") -> bool:
        """Report whether this bound event was produced for ``instance`` and ``accessor``."""
        return self._instance is instance and self._accessor is accessor

    def __iadd__(self, handler: object) -> "BoundEvent":
        """Subscribe ``handler`` by forwarding ``add_<Name>``.

        :param handler: Subscriber.
        :returns: This bound event, written back by the augmented assignment.
        """
        forward_call(self._instance, self._accessor.add_targets, (handler,), {})
        return self

    def __isub__(self, handler: object) -> "BoundEvent":
        """Unsubscribe ``handler`` by forwarding ``remove_<Name>``.

        :param handler: Subscriber.
        :returns: This bound event, written back by the augmented assignment.
        """
        forward_call(self._instance, self._accessor.remove_targets, (handler,), {})
        return self

    def __repr__(self) -> str:
        return f"<BoundEvent {self._accessor.attribute_name} of {type(self._instance).__qualname__}>"


class EventAccessor:
    """Class-level descriptor backing one interface event on a proxy type."""

    attribute_name: str
    add_targets: tuple[ForwardingTarget, ...]
    remove_targets: tuple[ForwardingTarget, ...]

    def __init__(
        self,
        attribute_name: str,
        add_targets: tuple[ForwardingTarget, ...],
        remove_targets: tuple[ForwardingTarget, ...],
    ) -> None:
        """Initialize the accessor.

        :param attribute_name: Event name.
        :param add_targets: ``add_<Name>`` declarations.
        :param remove_targets: ``remove_<Name>`` declarations.
        """
        self.attribute_name = attribute_name
        self.add_targets = add_targets
        self.remove_targets = remove_targets

    def __get__(self, instance: "InterfaceProxyBase | None", owner: type | None = None) -> object:
        """Return the accessor on the class and a bound event on instances.

        :param instance: Proxy instance, or ``None`` for class access.
        :param owner: Proxy type.
        :returns: ``BoundEvent`` for instance access.
        """
        if instance is None:
            return self
        return BoundEvent(instance, self)

    def __set__(self, instance: "InterfaceProxyBase", value: object) -> None:
        """Accept only the bound event written back by ``+=`` or ``-=``.

        :param instance: Proxy instance.
        :param value: Assigned value.
        :raises AttributeError: For any other assignment.
        """
        is_own_event: bool = isinstance(value, BoundEvent) is True and value.belongs_to(instance, self) is True
        if is_own_event is False:
            raise AttributeError(f"Event {self.attribute_name!r} can only be changed with += and -=")


class InterfaceProxyBase:
    """Base class of every generated proxy type.

    Instances hold one call handler, set by the constructor. Only settable
    interface members (properties and events) accept assignment.
    """

    __proxy_interface__: ClassVar[type]
    __proxy_members__: ClassVar[tuple[MemberDescriptor, ...]]
    _call_handler: CallHandler

    def __init__(self, call_handler: CallHandler) -> None:
        """Bind the proxy to its handler.

        :param call_handler: Handler receiving every member call.
        :raises InvalidHandler: If the handler is missing or unusable.
        """
        object.__setattr__(self, "_call_handler", validate_handler(call_handler))

    def __setattr__(self, attr_name: str, value: object) -> None:
        """Assign a settable interface member.

        :param attr_name: Attribute name.
        :param value: Assigned value.
        :raises AttributeError: If the attribute is not a settable member.
        """
        declared: object = getattr(type(self), attr_name, None)
        is_settable: bool = hasattr(declared, "__set__")
        if is_settable is False:
            raise AttributeError(
                f"{type(self).__qualname__!r} only exposes members of "
                + f"{self.__proxy_interface__.__qualname__}; cannot set {attr_name!r}"
            )
        object.__setattr__(self, attr_name, value)

    def __delattr__(self, attr_name: str) -> None:
        """Reject every deletion.

        :param attr_name: Attribute name.
        :raises AttributeError: Always.
        """
        raise AttributeError(f"{type(self).__qualname__!r} attributes cannot be deleted")

    def __repr__(self) -> str:
        return f"<{type(self).__qualname__} handler={self._call_handler!r}>"
