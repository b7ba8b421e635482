"""Interface contracts and the member descriptors extracted from them.

An interface contract is a ``typing.Protocol`` class. Extraction walks the
protocol (bases first, then body order) and desugars every declaration into
plain callable members:

- ``def name(self, ...)`` and each ``@overload`` of it become ``name``;
- a ``property`` or an annotation-only attribute becomes ``get_<Name>`` and
  ``set_<Name>``;
- ``__getitem__`` / ``__setitem__`` become ``get_Item`` / ``set_Item``;
- an ``event(...)`` declaration becomes ``add_<Name>`` and ``remove_<Name>``.
"""

import inspect
import linecache
import re
import tokenize
import types
import typing
from collections.abc import Callable
from collections.abc import Iterator
from typing import Any
from typing import ClassVar
from typing import Literal
from typing import Protocol

from proxyforge.errors import SynthesisFailure
from proxyforge.errors import UnsupportedType

MemberKind = Literal[
    "plain-method",
    "property-getter",
    "property-setter",
    "indexer-getter",
    "indexer-setter",
    "event-add",
    "event-remove",
]
PLAIN_METHOD: MemberKind = "plain-method"
PROPERTY_GETTER: MemberKind = "property-getter"
PROPERTY_SETTER: MemberKind = "property-setter"
INDEXER_GETTER: MemberKind = "indexer-getter"
INDEXER_SETTER: MemberKind = "indexer-setter"
EVENT_ADD: MemberKind = "event-add"
EVENT_REMOVE: MemberKind = "event-remove"
INDEXER_NAME: str = "Item"

_NON_MEMBER_DUNDERS: frozenset[str] = frozenset(
    {
        "__abstractmethods__",
        "__annotate__",
        "__annotate_func__",
        "__annotations__",
        "__annotations_cache__",
        "__callable_proto_members_only__",
        "__class_getitem__",
        "__dict__",
        "__doc__",
        "__firstlineno__",
        "__init__",
        "__init_subclass__",
        "__match_args__",
        "__module__",
        "__new__",
        "__non_callable_proto_members__",
        "__orig_bases__",
        "__parameters__",
        "__protocol_attrs__",
        "__qualname__",
        "__slots__",
        "__static_attributes__",
        "__subclasshook__",
        "__type_params__",
        "__weakref__",
    }
)
_RESERVED_DUNDERS: frozenset[str] = frozenset(
    {"__getattr__", "__getattribute__", "__setattr__", "__delattr__"}
)
_ANNOTATION_ONLY: object = object()
_SELF_KINDS: tuple[object, ...] = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def type_text(annotation: object) -> str:
    """Render an annotation for messages and reprs.

    :param annotation: Resolved annotation or ``None`` for "no value".
    :returns: Short human-readable text.
    """
    if annotation is None:
        return "None"
    if isinstance(annotation, type) is True:
        return annotation.__qualname__
    return repr(annotation).replace("typing.", "")


class event:
    """Declare an event on an interface.

    ``changed = event(Callable[[object], None])`` in a protocol body gives the
    proxy a ``changed`` attribute supporting ``+=`` (``add_changed``) and
    ``-=`` (``remove_changed``).
    """

    delegate_type: object

    def __init__(self, delegate_type: object = Callable[..., None]) -> None:
        """Initialize the declaration.

        :param delegate_type: Type of the callables that may subscribe.
        """
        self.delegate_type = delegate_type

    def __repr__(self) -> str:
        return f"event({type_text(self.delegate_type)})"


class MemberDescriptor:
    """One callable surface point of an interface after desugaring."""

    interface: type
    name: str
    attribute_name: str
    kind: MemberKind
    parameter_names: tuple[str, ...]
    parameter_types: tuple[object, ...]
    return_type: object
    signature: inspect.Signature

    def __init__(
        self,
        interface: type,
        name: str,
        attribute_name: str,
        kind: MemberKind,
        signature: inspect.Signature,
        parameter_types: tuple[object, ...],
        return_type: object,
    ) -> None:
        """Initialize a member descriptor.

        :param interface: Interface the member was extracted from.
        :param name: Desugared member name such as ``get_Item``.
        :param attribute_name: Python attribute the member was declared under.
        :param kind: Member kind tag.
        :param signature: Call signature without ``self``.
        :param parameter_types: Resolved parameter annotations, in order.
        :param return_type: Resolved return annotation, ``None`` for no value.
        """
        self.interface = interface
        self.name = name
        self.attribute_name = attribute_name
        self.kind = kind
        self.signature = signature
        self.parameter_names = tuple(signature.parameters)
        self.parameter_types = parameter_types
        self.return_type = return_type

    @property
    def returns_value(self) -> bool:
        """Report whether the member produces a value.

        :returns: ``False`` when the declared return type is ``None``.
        """
        return self.return_type is not None

    @property
    def return_type_text(self) -> str:
        """Return the return type as message text."""
        return type_text(self.return_type)

    @property
    def signature_text(self) -> str:
        """Return ``name(T1, T2) -> R`` for messages.

        :returns: Signature text.
        """
        parameter_text: str = ", ".join(type_text(parameter_type) for parameter_type in self.parameter_types)
        return f"{self.interface.__qualname__}.{self.name}({parameter_text}) -> {self.return_type_text}"

    def _identity(self) -> tuple[object, ...]:
        """Return the fields that define equality and hashing."""
        return (self.interface, self.name, self.parameter_types, self.return_type, self.kind)

    def __eq__(self, other: object) -> bool:
        """Compare by interface, name, parameter types, return type and kind.

        :param other: Object to compare with.
        :returns: Whether both describe the same member.
        """
        if isinstance(other, MemberDescriptor) is False:
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self) -> int:
        """Hash the fields used for equality."""
        return hash(self._identity())

    def __repr__(self) -> str:
        return f"<MemberDescriptor {self.kind} {self.signature_text}>"


class InterfaceDescriptor:
    """An interface identity plus its ordered member descriptors."""

    interface: type
    members: tuple[MemberDescriptor, ...]

    def __init__(self, interface: type, members: tuple[MemberDescriptor, ...]) -> None:
        """Initialize the descriptor.

        :param interface: Interface the members were extracted from.
        :param members: Member descriptors in declaration order.
        """
        self.interface = interface
        self.members = members

    def members_named(self, name: str) -> list[MemberDescriptor]:
        """Return every member with one desugared name, overloads included.

        :param name: Desugared member name.
        :returns: Matching members in declaration order.
        """
        return [member for member in self.members if member.name == name]

    def __iter__(self) -> Iterator[MemberDescriptor]:
        """Iterate over members in declaration order."""
        return iter(self.members)

    def __len__(self) -> int:
        """Return the number of members."""
        return len(self.members)

    def __repr__(self) -> str:
        return f"<InterfaceDescriptor {self.interface.__qualname__} members={len(self.members)}>"


def ensure_interface(interface: object) -> type:
    """Check that ``interface`` is a proxyable interface contract.

    :param interface: Candidate interface.
    :returns: The interface class.
    :raises UnsupportedType: If the value is not a non-generic protocol class.
    """
    if isinstance(interface, type) is False:
        raise UnsupportedType(interface, "only typing.Protocol classes can be proxied")
    if interface is Protocol:
        raise UnsupportedType(interface, "typing.Protocol itself declares no members")
    is_protocol: bool = getattr(interface, "_is_protocol", False) is True
    if is_protocol is False:
        if inspect.isabstract(interface) is True:
            raise UnsupportedType(interface, "abstract classes are not interfaces; declare a typing.Protocol")
        raise UnsupportedType(interface, "concrete classes are not interfaces; declare a typing.Protocol")
    type_parameters: tuple[object, ...] = getattr(interface, "__parameters__", ())
    if len(type_parameters) > 0:
        raise UnsupportedType(interface, "generic interfaces are not supported")
    return interface


def _is_dunder(name: str) -> bool:
    """Report whether ``name`` has the ``__name__`` form."""
    return len(name) > 4 and name.startswith("__") and name.endswith("__")


def _is_member_name(name: str) -> bool:
    """Report whether a namespace entry can be an interface member.

    :param name: Attribute name.
    :returns: ``False`` for private names and typing bookkeeping.
    """
    if _is_dunder(name) is True:
        return name not in _NON_MEMBER_DUNDERS
    return name.startswith("_") is False


def _protocol_classes(interface: type) -> list[type]:
    """Return the protocol classes of ``interface``, bases first."""
    classes: list[type] = []
    for klass in reversed(interface.__mro__):
        is_protocol: bool = klass.__dict__.get("_is_protocol", False) is True
        if is_protocol is True and klass is not Protocol:
            classes.append(klass)
    return classes


def _ordered_member_names(interface: type) -> list[str]:
    """List member names of ``interface`` in declaration order.

    :param interface: Interface being extracted.
    :returns: Names from base protocols first, annotated attributes after the
        functions of the same body.
    """
    names: list[str] = []
    seen: set[str] = set()
    for klass in _protocol_classes(interface):
        own_annotations: dict[str, object] = inspect.get_annotations(klass)
        for name in [*klass.__dict__, *own_annotations]:
            if name in seen or _is_member_name(name) is False:
                continue
            seen.add(name)
            names.append(name)
    return names


def _declaration(interface: type, name: str) -> tuple[type, object]:
    """Find the most derived declaration of ``name``.

    :returns: Tuple of ``(owner_class, raw_value)``; annotation-only members
        yield a sentinel value.
    """
    for klass in interface.__mro__:
        if name in klass.__dict__:
            return klass, klass.__dict__[name]
        if name in inspect.get_annotations(klass):
            return klass, _ANNOTATION_ONLY
    raise SynthesisFailure(interface, f"member {name!r} has no declaration")


def _type_hints(interface: type, target: object) -> dict[str, Any]:
    """Resolve the annotations of a function or class.

    :param interface: Interface being extracted, for error reporting.
    :param target: Function or class whose annotations are resolved.
    :returns: Resolved annotations by name.
    :raises SynthesisFailure: If an annotation cannot be evaluated.
    """
    try:
        return typing.get_type_hints(target)
    except (NameError, TypeError, AttributeError, SyntaxError) as exc:
        raise SynthesisFailure(interface, f"cannot resolve annotations of {target!r}: {exc}") from exc


def _normalize_return(annotation: object) -> object:
    """Map ``NoneType`` to ``None``, the "no value" marker."""
    if annotation is type(None):
        return None
    return annotation


def _code_of(function: object) -> types.CodeType | None:
    """Return the code object of a function or wrapped method, if it has one."""
    code: object = getattr(getattr(function, "__func__", function), "__code__", None)
    if isinstance(code, types.CodeType) is True:
        return code
    return None


def _body_functions(owner: type) -> list[types.CodeType]:
    """Return code objects of the functions written in the body of ``owner``.

    ``typing``'s overload placeholder and functions assigned from elsewhere are
    skipped: only functions whose qualified name is nested under ``owner``
    count.

    :param owner: Class whose body is inspected.
    :returns: Code objects, in no particular order.
    """
    prefix: str = f"{owner.__qualname__}."
    codes: list[types.CodeType] = []
    for value in owner.__dict__.values():
        candidates: list[object] = [getattr(value, "__func__", value)]
        if isinstance(value, property) is True:
            candidates = [value.fget, value.fset, value.fdel]
        for candidate in candidates:
            code: types.CodeType | None = _code_of(candidate)
            qualname: str = getattr(candidate, "__qualname__", "")
            if code is not None and qualname.startswith(prefix) is True:
                codes.append(code)
    return codes


def _indent_width(line: str) -> int:
    """Return the width of the leading whitespace of ``line``."""
    return len(line) - len(line.lstrip())


def _class_header_index(lines: list[str], class_name: str, anchor_index: int) -> int | None:
    """Find the ``class`` statement enclosing one line of its body.

    :param lines: Source file lines.
    :param class_name: Unqualified class name.
    :param anchor_index: Zero-based index of a line inside the class body.
    :returns: Zero-based index of the header, or ``None`` when not found.
    """
    anchor_indent: int = _indent_width(lines[anchor_index])
    header: re.Pattern[str] = re.compile(rf"^(\s*)class\s+{re.escape(class_name)}\b")
    for index in range(anchor_index - 1, -1, -1):
        match: re.Match[str] | None = header.match(lines[index])
        if match is not None and len(match.group(1)) < anchor_indent:
            return index
    return None


def _class_body_lines(owner: type) -> tuple[str, range] | None:
    """Locate the source lines of the body that created ``owner``.

    Classes record no source position, so the body is found from its own
    functions: the nearest enclosing ``class <Name>`` header above the first
    of them, extended to the end of its indented block. A class redefined
    under the same name therefore resolves to its latest body.

    :param owner: Class to locate.
    :returns: Tuple of ``(filename, one-based line range)``, or ``None`` when
        the class has no functions or its source is unavailable.
    """
    codes: list[types.CodeType] = _body_functions(owner)
    if len(codes) == 0:
        return None
    filename: str = codes[0].co_filename
    lines: list[str] = linecache.getlines(filename)
    anchor_line: int = min(code.co_firstlineno for code in codes if code.co_filename == filename)
    if anchor_line < 1 or anchor_line > len(lines):
        return None
    header_index: int | None = _class_header_index(lines, owner.__name__, anchor_line - 1)
    if header_index is None:
        return None
    try:
        block: list[str] = inspect.getblock(lines[header_index:])
    except (SyntaxError, tokenize.TokenError):
        return None
    return filename, range(header_index + 1, header_index + len(block) + 1)


def _is_declared_in(
    function: object,
    body: tuple[str, range] | None,
    implementation: types.CodeType | None,
) -> bool:
    """Check that one registered overload belongs to the declaration at hand.

    :param function: Function registered with ``@overload``.
    :param body: Source span of the owning class body, when known.
    :param implementation: Code of the implementation following the
        overloads, when the class declares one.
    :returns: ``True`` when the overload lies in the body and before the
        implementation.
    """
    code: types.CodeType | None = _code_of(function)
    if code is None:
        return False
    if body is not None:
        filename, body_lines = body
        if code.co_filename != filename or code.co_firstlineno not in body_lines:
            return False
    if implementation is not None:
        if code.co_filename != implementation.co_filename:
            return False
        if code.co_firstlineno >= implementation.co_firstlineno:
            return False
    return True


def _declared_overloads(owner: type, name: str, raw: object) -> list[object]:
    """Return the ``@overload`` declarations of one method, or the method itself.

    ``typing`` keeps overloads per module and qualified name, so a class
    redefined under the same name still finds the overloads of its earlier
    definitions there. Only overloads written in the current body of
    ``owner``, and before the implementation when there is one, are kept.

    :param owner: Class declaring the method.
    :param name: Attribute name of the method.
    :param raw: Value found in the class namespace.
    :returns: Declarations to extract, in source order.
    """
    qualname: str = f"{owner.__qualname__}.{name}"
    registry_key = types.SimpleNamespace(__module__=owner.__module__, __qualname__=qualname)
    overloads: list[object] = list(typing.get_overloads(registry_key))
    if len(overloads) == 0:
        return [raw]

    implementation: types.CodeType | None = None
    if getattr(raw, "__qualname__", None) == qualname:
        implementation = _code_of(raw)
    body: tuple[str, range] | None = _class_body_lines(owner)
    declared: list[object] = [
        function for function in overloads if _is_declared_in(function, body, implementation) is True
    ]
    if len(declared) > 0:
        declared.sort(key=lambda function: _code_of(function).co_firstlineno)
        return declared
    return [raw]


class _Shape:
    """Signature and resolved types of one declared callable, ``self`` removed."""

    signature: inspect.Signature
    parameter_types: tuple[object, ...]
    return_type: object

    def __init__(self, signature: inspect.Signature, parameter_types: tuple[object, ...], return_type: object) -> None:
        """Initialize the shape.

        :param signature: Signature without ``self``.
        :param parameter_types: Resolved parameter annotations.
        :param return_type: Resolved return annotation.
        """
        self.signature = signature
        self.parameter_types = parameter_types
        self.return_type = return_type


def _callable_shape(interface: type, attribute_name: str, function: object) -> _Shape:
    """Resolve the shape of a declared method.

    :param interface: Interface being extracted.
    :param attribute_name: Attribute the function was declared under.
    :param function: Declared function.
    :returns: Shape without the leading ``self`` parameter.
    :raises SynthesisFailure: If the function cannot be represented.
    """
    try:
        full_signature: inspect.Signature = inspect.signature(function)
    except (TypeError, ValueError) as exc:
        raise SynthesisFailure(interface, f"cannot read signature of {attribute_name!r}: {exc}") from exc

    parameters: list[inspect.Parameter] = list(full_signature.parameters.values())
    if len(parameters) == 0 or parameters[0].kind not in _SELF_KINDS:
        raise SynthesisFailure(interface, f"{attribute_name!r} must take self as its first parameter")
    parameters = parameters[1:]

    hints: dict[str, Any] = _type_hints(interface, function)
    parameter_types: list[object] = []
    for parameter in parameters:
        hint: object = hints.get(parameter.name, Any)
        if parameter.kind == inspect.Parameter.VAR_POSITIONAL:
            hint = tuple[hint, ...]
        elif parameter.kind == inspect.Parameter.VAR_KEYWORD:
            hint = dict[str, hint]
        parameter_types.append(hint)

    return_type: object = _normalize_return(hints.get("return", Any))
    signature: inspect.Signature = full_signature.replace(parameters=parameters)
    return _Shape(signature, tuple(parameter_types), return_type)


def _single_parameter_signature(parameter_name: str, annotation: object) -> inspect.Signature:
    """Build the signature of an accessor taking one value.

    :param parameter_name: Name of the value parameter.
    :param annotation: Annotation recorded on the parameter.
    :returns: Signature without ``self``.
    """
    parameter = inspect.Parameter(
        parameter_name,
        inspect.Parameter.POSITIONAL_OR_KEYWORD,
        annotation=annotation,
    )
    return inspect.Signature([parameter])


class _Extraction:
    """Accumulate member descriptors for one interface."""

    interface: type
    members: list[MemberDescriptor]

    def __init__(self, interface: type) -> None:
        """Start an empty extraction.

        :param interface: Interface being extracted.
        """
        self.interface = interface
        self.members = []

    def add(
        self,
        name: str,
        attribute_name: str,
        kind: MemberKind,
        signature: inspect.Signature,
        parameter_types: tuple[object, ...],
        return_type: object,
    ) -> None:
        """Record one member descriptor.

        :param name: Desugared member name.
        :param attribute_name: Attribute the member was declared under.
        :param kind: Member kind tag.
        :param signature: Call signature without ``self``.
        :param parameter_types: Resolved parameter annotations.
        :param return_type: Resolved return annotation, ``None`` for no value.
        :raises SynthesisFailure: If an overload with the same parameter types
            was already recorded.
        """
        for existing in self.members:
            same_member: bool = existing.name == name and existing.parameter_types == parameter_types
            if same_member is True:
                raise SynthesisFailure(
                    self.interface,
                    f"{attribute_name!r} declares two overloads taking {parameter_types!r}",
                )
        member = MemberDescriptor(
            self.interface,
            name,
            attribute_name,
            kind,
            signature,
            parameter_types,
            return_type,
        )
        self.members.append(member)

    def add_accessor_pair(
        self,
        attribute_name: str,
        value_type: object,
        has_getter: bool,
        has_setter: bool,
        setter_type: object,
    ) -> None:
        """Record the ``get_<Name>`` and/or ``set_<Name>`` members of a property.

        :param attribute_name: Property name.
        :param value_type: Type returned by the getter.
        :param has_getter: Whether the property can be read.
        :param has_setter: Whether the property can be assigned.
        :param setter_type: Type accepted by the setter.
        """
        if has_getter is True:
            self.add(
                f"get_{attribute_name}",
                attribute_name,
                PROPERTY_GETTER,
                inspect.Signature([]),
                (),
                value_type,
            )
        if has_setter is True:
            self.add(
                f"set_{attribute_name}",
                attribute_name,
                PROPERTY_SETTER,
                _single_parameter_signature("value", setter_type),
                (setter_type,),
                None,
            )

    def add_annotated_attribute(self, owner: type, attribute_name: str) -> None:
        """Record an annotation-only attribute; ``ClassVar`` ones are read-only.

        :param owner: Class that annotates the attribute.
        :param attribute_name: Attribute name.
        """
        hint: object = _type_hints(self.interface, owner)[attribute_name]
        is_class_var: bool = typing.get_origin(hint) is ClassVar
        if is_class_var is True:
            class_var_args: tuple[object, ...] = typing.get_args(hint)
            value_type: object = class_var_args[0] if len(class_var_args) > 0 else Any
            self.add_accessor_pair(attribute_name, value_type, True, False, value_type)
            return
        self.add_accessor_pair(attribute_name, hint, True, True, hint)

    def add_property(self, attribute_name: str, declared: property) -> None:
        """Record a declared ``property``.

        :param attribute_name: Property name.
        :param declared: Property object from the protocol body.
        :raises SynthesisFailure: If the setter does not take exactly one value.
        """
        getter_type: object = Any
        if declared.fget is not None:
            getter_hints: dict[str, Any] = _type_hints(self.interface, declared.fget)
            getter_type = _normalize_return(getter_hints.get("return", Any))

        setter_type: object = getter_type
        if declared.fset is not None:
            setter_shape: _Shape = _callable_shape(self.interface, attribute_name, declared.fset)
            if len(setter_shape.parameter_types) != 1:
                raise SynthesisFailure(self.interface, f"setter of {attribute_name!r} must take exactly one value")
            declared_type: object = setter_shape.parameter_types[0]
            if declared_type is not Any:
                setter_type = declared_type

        self.add_accessor_pair(
            attribute_name,
            getter_type,
            declared.fget is not None,
            declared.fset is not None,
            setter_type,
        )

    def add_event(self, attribute_name: str, declared: event) -> None:
        """Record the subscribe and unsubscribe members of an event."""
        delegate_type: object = declared.delegate_type
        signature: inspect.Signature = _single_parameter_signature("handler", delegate_type)
        self.add(f"add_{attribute_name}", attribute_name, EVENT_ADD, signature, (delegate_type,), None)
        self.add(f"remove_{attribute_name}", attribute_name, EVENT_REMOVE, signature, (delegate_type,), None)

    def add_methods(self, owner: type, attribute_name: str, raw: object) -> None:
        """Record one member per declaration of a method or indexer.

        :param owner: Class declaring the method.
        :param attribute_name: Method name.
        :param raw: Function found in the class namespace.
        :raises SynthesisFailure: If a declaration cannot be represented.
        """
        for declared in _declared_overloads(owner, attribute_name, raw):
            shape: _Shape = _callable_shape(self.interface, attribute_name, declared)
            if attribute_name == "__getitem__":
                self.add(
                    f"get_{INDEXER_NAME}",
                    attribute_name,
                    INDEXER_GETTER,
                    shape.signature,
                    shape.parameter_types,
                    shape.return_type,
                )
            elif attribute_name == "__setitem__":
                if len(shape.parameter_types) < 2:
                    raise SynthesisFailure(self.interface, "__setitem__ must take an index and a value")
                self.add(
                    f"set_{INDEXER_NAME}",
                    attribute_name,
                    INDEXER_SETTER,
                    shape.signature,
                    shape.parameter_types,
                    None,
                )
            else:
                self.add(
                    attribute_name,
                    attribute_name,
                    PLAIN_METHOD,
                    shape.signature,
                    shape.parameter_types,
                    shape.return_type,
                )


def extract_interface_descriptor(interface: object) -> InterfaceDescriptor:
    """Extract the ordered member descriptors of an interface.

    :param interface: Protocol class to inspect.
    :returns: Descriptor covering every member the proxy must implement.
    :raises UnsupportedType: If ``interface`` is not an interface contract.
    :raises SynthesisFailure: If a member cannot be represented.
    """
    checked_interface: type = ensure_interface(interface)
    extraction = _Extraction(checked_interface)
    for attribute_name in _ordered_member_names(checked_interface):
        if attribute_name in _RESERVED_DUNDERS:
            raise SynthesisFailure(checked_interface, f"{attribute_name} cannot be forwarded")

        owner, raw = _declaration(checked_interface, attribute_name)
        if raw is _ANNOTATION_ONLY:
            extraction.add_annotated_attribute(owner, attribute_name)
        elif isinstance(raw, event) is True:
            extraction.add_event(attribute_name, raw)
        elif isinstance(raw, property) is True:
            extraction.add_property(attribute_name, raw)
        elif isinstance(raw, (staticmethod, classmethod)) is True:
            raise SynthesisFailure(checked_interface, f"{attribute_name!r} is a static or class method")
        elif inspect.isfunction(raw) is True:
            extraction.add_methods(owner, attribute_name, raw)
        elif _is_dunder(attribute_name) is True:
            # Implicit values such as ``__hash__ = None`` next to a declared ``__eq__``.
            continue
        else:
            raise SynthesisFailure(
                checked_interface,
                f"{attribute_name!r} is not a method, property, event or annotated attribute",
            )
    return InterfaceDescriptor(checked_interface, tuple(extraction.members))
