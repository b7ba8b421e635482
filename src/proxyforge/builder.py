"""Proxy type synthesis from interface descriptors."""

import inspect
import logging
import types
from collections.abc import Callable

from proxyforge.errors import SynthesisFailure
from proxyforge.members import EVENT_ADD
from proxyforge.members import EVENT_REMOVE
from proxyforge.members import INDEXER_GETTER
from proxyforge.members import INDEXER_SETTER
from proxyforge.members import PLAIN_METHOD
from proxyforge.members import PROPERTY_GETTER
from proxyforge.members import PROPERTY_SETTER
from proxyforge.members import InterfaceDescriptor
from proxyforge.members import MemberDescriptor
from proxyforge.members import MemberKind
from proxyforge.runtime import EventAccessor
from proxyforge.runtime import ForwardingTarget
from proxyforge.runtime import InterfaceProxyBase
from proxyforge.runtime import forward_call
from proxyforge.runtime import forward_index

logger: logging.Logger = logging.getLogger(__name__)

Targets = tuple[ForwardingTarget, ...]


def _group_members(descriptor: InterfaceDescriptor) -> dict[tuple[str, MemberKind], list[MemberDescriptor]]:
    """Group members by ``(attribute_name, kind)``, keeping declaration order."""
    groups: dict[tuple[str, MemberKind], list[MemberDescriptor]] = {}
    for member in descriptor.members:
        groups.setdefault((member.attribute_name, member.kind), []).append(member)
    return groups


def _targets(members: list[MemberDescriptor]) -> Targets:
    """Compile forwarding targets for one attribute.

    :param members: Declarations sharing the attribute, in order.
    :returns: Targets; overloaded groups match argument types.
    """
    is_overloaded: bool = len(members) > 1
    return tuple(ForwardingTarget(member, is_overloaded) for member in members)


def _with_self(signature: inspect.Signature) -> inspect.Signature:
    """Prepend a positional ``self`` parameter to a member signature."""
    self_parameter = inspect.Parameter("self", inspect.Parameter.POSITIONAL_ONLY)
    return signature.replace(parameters=[self_parameter, *signature.parameters.values()])


def _finish(function: Callable[..., object], proxy_name: str, attribute_name: str, targets: Targets) -> None:
    """Name and document a generated function after the members it forwards.

    :param function: Generated function.
    :param proxy_name: Name of the proxy type.
    :param attribute_name: Attribute the function is installed under.
    :param targets: Members the function forwards.
    """
    function.__name__ = attribute_name
    function.__qualname__ = f"{proxy_name}.{attribute_name}"
    function.__doc__ = f"Forward {', '.join(target.member.signature_text for target in targets)}."
    if len(targets) == 1:
        function.__signature__ = _with_self(targets[0].member.signature)


def _method(proxy_name: str, attribute_name: str, targets: Targets) -> Callable[..., object]:
    """Build the forwarding function of a plain method.

    :param proxy_name: Name of the proxy type.
    :param attribute_name: Method name.
    :param targets: Method declarations.
    :returns: Function for the proxy namespace.
    """

    def forwarding_method(self: InterfaceProxyBase, *args: object, **kwargs: object) -> object:
        return forward_call(self, targets, args, kwargs)

    _finish(forwarding_method, proxy_name, attribute_name, targets)
    return forwarding_method


def _indexer_getter(proxy_name: str, targets: Targets) -> Callable[..., object]:
    """Build ``__getitem__`` forwarding ``get_Item``.

    :param proxy_name: Name of the proxy type.
    :param targets: ``get_Item`` declarations.
    :returns: Function for the proxy namespace.
    """

    def forwarding_getitem(self: InterfaceProxyBase, key: object) -> object:
        return forward_index(self, targets, key)

    _finish(forwarding_getitem, proxy_name, "__getitem__", targets)
    return forwarding_getitem


def _indexer_setter(proxy_name: str, targets: Targets) -> Callable[..., None]:
    """Build ``__setitem__`` forwarding ``set_Item``.

    :param proxy_name: Name of the proxy type.
    :param targets: ``set_Item`` declarations.
    :returns: Function for the proxy namespace.
    """

    def forwarding_setitem(self: InterfaceProxyBase, key: object, value: object) -> None:
        forward_index(self, targets, key, (value,))

    _finish(forwarding_setitem, proxy_name, "__setitem__", targets)
    return forwarding_setitem


def _property(attribute_name: str, getter_targets: Targets | None, setter_targets: Targets | None) -> property:
    """Build the property backing ``get_<Name>`` / ``set_<Name>``.

    :param attribute_name: Property name.
    :param getter_targets: Getter declarations, or ``None`` when write-only.
    :param setter_targets: Setter declarations, or ``None`` when read-only.
    :returns: Property object for the proxy namespace.
    """
    fget: Callable[[InterfaceProxyBase], object] | None = None
    fset: Callable[[InterfaceProxyBase, object], None] | None = None
    if getter_targets is not None:
        bound_getter_targets: Targets = getter_targets

        def fget(self: InterfaceProxyBase) -> object:
            return forward_call(self, bound_getter_targets, (), {})

    if setter_targets is not None:
        bound_setter_targets: Targets = setter_targets

        def fset(self: InterfaceProxyBase, value: object) -> None:
            forward_call(self, bound_setter_targets, (value,), {})

    return property(fget, fset, doc=f"Forwarded property {attribute_name!r}.")


def synthesize_proxy_type(descriptor: InterfaceDescriptor) -> type:
    """Generate the proxy type implementing one interface.

    Every member packs its arguments, calls the bound handler once and
    converts the result to the declared return type.

    :param descriptor: Extracted interface descriptor.
    :returns: New class subclassing the interface and ``InterfaceProxyBase``.
    :raises SynthesisFailure: If a member or the class itself cannot be built.
    """
    interface: type = descriptor.interface
    proxy_name: str = f"{interface.__name__}_Proxy"
    namespace: dict[str, object] = {
        "__module__": "proxyforge.runtime",
        "__qualname__": proxy_name,
        "__doc__": f"Proxy forwarding every member of {interface.__qualname__} to a call handler.",
        "__proxy_interface__": interface,
        "__proxy_members__": descriptor.members,
    }
    accessors: dict[str, dict[MemberKind, Targets]] = {}

    for (attribute_name, kind), members in _group_members(descriptor).items():
        targets: Targets = _targets(members)
        if kind == PLAIN_METHOD:
            namespace[attribute_name] = _method(proxy_name, attribute_name, targets)
        elif kind == INDEXER_GETTER:
            namespace["__getitem__"] = _indexer_getter(proxy_name, targets)
        elif kind == INDEXER_SETTER:
            namespace["__setitem__"] = _indexer_setter(proxy_name, targets)
        else:
            accessors.setdefault(attribute_name, {})[kind] = targets

    for attribute_name, by_kind in accessors.items():
        if EVENT_ADD in by_kind:
            namespace[attribute_name] = EventAccessor(attribute_name, by_kind[EVENT_ADD], by_kind[EVENT_REMOVE])
            continue
        namespace[attribute_name] = _property(
            attribute_name,
            by_kind.get(PROPERTY_GETTER),
            by_kind.get(PROPERTY_SETTER),
        )

    try:
        proxy_type: type = types.new_class(
            proxy_name,
            (InterfaceProxyBase, interface),
            exec_body=lambda class_namespace: class_namespace.update(namespace),
        )
    except (TypeError, ValueError) as exc:
        raise SynthesisFailure(interface, f"class creation failed: {exc}") from exc

    still_abstract: frozenset[str] = getattr(proxy_type, "__abstractmethods__", frozenset())
    if len(still_abstract) > 0:
        raise SynthesisFailure(interface, f"abstract members left unimplemented: {sorted(still_abstract)}")

    logger.debug("Synthesized %s with %d members", proxy_name, len(descriptor.members))
    return proxy_type
