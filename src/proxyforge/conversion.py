"""Conversion of handler results and matching of overload arguments.

Annotations are compiled once, at synthesis time, into ``pydantic_core``
schemas and checked in strict mode, so ``int`` accepts neither ``"1"`` nor
``True``. Accepted results are handed back as the handler's own object; the
one exception is an ``int`` returned for a ``float`` member, which is widened.
"""

import collections.abc
import types
import typing
from collections.abc import Callable
from typing import Annotated
from typing import Any
from typing import Literal
from typing import Union

from pydantic_core import SchemaError
from pydantic_core import SchemaValidator
from pydantic_core import ValidationError
from pydantic_core import core_schema

from proxyforge.errors import ConversionFailure
from proxyforge.errors import SynthesisFailure
from proxyforge.members import MemberDescriptor
from proxyforge.members import type_text

_SCALAR_SCHEMAS: dict[type, Callable[[], core_schema.CoreSchema]] = {
    bool: core_schema.bool_schema,
    int: core_schema.int_schema,
    float: core_schema.float_schema,
    str: core_schema.str_schema,
    bytes: core_schema.bytes_schema,
}


def _is_passthrough(annotation: object) -> bool:
    """Report whether an annotation accepts every value unchecked.

    :param annotation: Resolved annotation.
    :returns: ``True`` for ``Any`` and ``object``.
    """
    return annotation is Any or annotation is object


def _item_schema(args: tuple[object, ...], index: int) -> core_schema.CoreSchema:
    """Compile one type argument of a container, ``Any`` when it is missing.

    :param args: Type arguments of the container annotation.
    :param index: Position of the wanted argument.
    :returns: Item schema.
    """
    if len(args) > index:
        return annotation_schema(args[index])
    return core_schema.any_schema()


def _class_schema(annotation: type) -> core_schema.CoreSchema:
    """Compile a bare class annotation.

    :param annotation: Class used as an annotation.
    :returns: Strict scalar schema, ``any`` for static-only protocols, otherwise
        an ``isinstance`` check.
    """
    scalar_factory: Callable[[], core_schema.CoreSchema] | None = _SCALAR_SCHEMAS.get(annotation)
    if scalar_factory is not None:
        return scalar_factory()
    is_protocol: bool = getattr(annotation, "_is_protocol", False) is True
    is_runtime_protocol: bool = getattr(annotation, "_is_runtime_protocol", False) is True
    if is_protocol is True and is_runtime_protocol is False:
        return core_schema.any_schema()
    return core_schema.is_instance_schema(annotation)


def annotation_schema(annotation: object) -> core_schema.CoreSchema:
    """Compile one resolved annotation into a core schema.

    :param annotation: Resolved annotation.
    :returns: Schema accepting values of that annotation.
    :raises TypeError: If the annotation has no conversion rule.
    """
    if _is_passthrough(annotation) is True:
        return core_schema.any_schema()
    if annotation is None or annotation is type(None):
        return core_schema.none_schema()
    if isinstance(annotation, (str, typing.ForwardRef)) is True:
        raise TypeError(f"unresolved forward reference {annotation!r}")
    if isinstance(annotation, typing.TypeVar) is True:
        raise TypeError(f"type parameter {annotation!r} is not supported")
    if isinstance(annotation, typing.NewType) is True:
        return annotation_schema(annotation.__supertype__)

    origin: object = typing.get_origin(annotation)
    args: tuple[object, ...] = typing.get_args(annotation)
    if origin is Annotated:
        return annotation_schema(args[0])
    if origin is Union or origin is types.UnionType:
        non_none: list[object] = [arg for arg in args if arg is not type(None)]
        if len(non_none) == 1 and len(non_none) < len(args):
            return core_schema.nullable_schema(annotation_schema(non_none[0]))
        return core_schema.union_schema([annotation_schema(arg) for arg in args])
    if origin is Literal:
        return core_schema.literal_schema(list(args))
    if origin is list:
        return core_schema.list_schema(_item_schema(args, 0))
    if origin is set:
        return core_schema.set_schema(_item_schema(args, 0))
    if origin is frozenset:
        return core_schema.frozenset_schema(_item_schema(args, 0))
    if origin is dict:
        return core_schema.dict_schema(_item_schema(args, 0), _item_schema(args, 1))
    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return core_schema.tuple_schema([annotation_schema(args[0])], variadic_item_index=0)
        return core_schema.tuple_schema([annotation_schema(arg) for arg in args])
    if origin is collections.abc.Callable:
        return core_schema.callable_schema()
    if origin is type:
        if len(args) > 0 and isinstance(args[0], type) is True:
            return core_schema.is_subclass_schema(args[0])
        return core_schema.is_instance_schema(type)
    if isinstance(origin, type) is True:
        return core_schema.is_instance_schema(origin)
    if isinstance(annotation, type) is True:
        return _class_schema(annotation)
    raise TypeError(f"no conversion rule for {annotation!r}")


def _compile(member: MemberDescriptor, annotation: object) -> SchemaValidator:
    """Build the validator for one annotation of ``member``.

    :param member: Member the annotation belongs to, used in error messages.
    :param annotation: Resolved annotation.
    :returns: Validator for the annotation.
    :raises SynthesisFailure: If the annotation has no conversion rule.
    """
    try:
        return SchemaValidator(annotation_schema(annotation))
    except (TypeError, SchemaError) as exc:
        raise SynthesisFailure(
            member.interface,
            f"{member.signature_text} uses {type_text(annotation)}: {exc}",
        ) from exc


class ReturnConverter:
    """Convert handler results to one member's declared return type."""

    member: MemberDescriptor
    _validator: SchemaValidator | None

    def __init__(self, member: MemberDescriptor) -> None:
        """Compile the converter.

        :param member: Member whose return type is enforced.
        :raises SynthesisFailure: If the return annotation has no conversion rule.
        """
        self.member = member
        self._validator = None
        if member.returns_value is True and _is_passthrough(member.return_type) is False:
            self._validator = _compile(member, member.return_type)

    def convert(self, value: object) -> object:
        """Convert one handler result.

        The handler's object is returned as is, so containers, enum members
        and subclass instances keep their identity. An ``int`` accepted where
        a ``float`` is declared comes back as a ``float``.

        :param value: Value returned by the call handler.
        :returns: Value typed as the member's return type.
        :raises ConversionFailure: If the value does not fit the return type.
        """
        if self._validator is None:
            return value
        try:
            validated: object = self._validator.validate_python(value, strict=True)
        except ValidationError as exc:
            raise ConversionFailure(self.member, value, str(exc)) from exc
        is_widened: bool = isinstance(validated, float) is True and isinstance(value, float) is False
        if is_widened is True:
            return validated
        return value


class ArgumentMatcher:
    """Strict acceptance test for one declared parameter."""

    _validator: SchemaValidator | None

    def __init__(self, member: MemberDescriptor, annotation: object) -> None:
        """Compile the matcher.

        :param member: Overloaded member declaring the parameter.
        :param annotation: Parameter annotation.
        :raises SynthesisFailure: If the annotation has no conversion rule.
        """
        self._validator = None
        if _is_passthrough(annotation) is False:
            self._validator = _compile(member, annotation)

    def accepts(self, value: object) -> bool:
        """Check one argument against the parameter annotation.

        :param value: Argument value.
        :returns: ``True`` when the value fits without coercion.
        """
        if self._validator is None:
            return True
        return self._validator.isinstance_python(value, strict=True)


def build_argument_matchers(member: MemberDescriptor) -> tuple[ArgumentMatcher, ...]:
    """Compile matchers for every parameter of ``member``.

    :param member: Member whose parameters are matched.
    :returns: One matcher per parameter, in declared order.
    """
    return tuple(ArgumentMatcher(member, parameter_type) for parameter_type in member.parameter_types)
