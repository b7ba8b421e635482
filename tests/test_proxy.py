"""Tests for proxy creation and call forwarding."""

import abc
import inspect
from collections.abc import Callable
from typing import Protocol

import pytest

from proxyforge import GenerationCache
from proxyforge import InterfaceProxyBase
from proxyforge import InvalidHandler
from proxyforge import MemberDescriptor
from proxyforge import NoMatchingOverload
from proxyforge import ProxyFactory
from proxyforge import SynthesisFailure
from proxyforge import UnsupportedType
from proxyforge import create_proxy
from proxyforge import proxy_type_for
from tests.fixtures.contracts import AbstractService
from tests.fixtures.contracts import ConcreteService
from tests.fixtures.contracts import Counter
from tests.fixtures.contracts import Grid
from tests.fixtures.contracts import Payload
from tests.fixtures.contracts import RaisingHandler
from tests.fixtures.contracts import RecordingHandler
from tests.fixtures.contracts import Widget

I_VALUE: int = 10
S_VALUE: str = "payload"
O_VALUE: Payload = Payload(3, "poco")


def _on_changed(sender: object, args: object) -> None:
    """Event subscriber used by subscription tests.

    :param sender: Event sender.
    :param args: Event arguments.
    """


def _subscribe(widget: Widget) -> None:
    widget.changed += _on_changed


def _unsubscribe(widget: Widget) -> None:
    widget.changed -= _on_changed


def _set_integer(widget: Widget) -> None:
    widget.integer = 1


def _set_int_index(widget: Widget) -> None:
    widget[1] = 10


def _set_str_index(widget: Widget) -> None:
    widget["hello"] = "world"


VOID_CASES: list[object] = [
    pytest.param(lambda widget: widget.void_method(), "void_method", (), id="void_method"),
    pytest.param(
        lambda widget: widget.void_method_args(I_VALUE, S_VALUE, O_VALUE),
        "void_method_args",
        (I_VALUE, S_VALUE, O_VALUE),
        id="void_method_args",
    ),
    pytest.param(_subscribe, "add_changed", (_on_changed,), id="add_event"),
    pytest.param(_unsubscribe, "remove_changed", (_on_changed,), id="remove_event"),
    pytest.param(_set_integer, "set_integer", (1,), id="set_property"),
    pytest.param(_set_int_index, "set_Item", (1, 10), id="set_int_index"),
    pytest.param(_set_str_index, "set_Item", ("hello", "world"), id="set_str_index"),
]

VALUE_CASES: list[object] = [
    pytest.param(lambda widget: widget.int_method(), "int_method", 0, id="int_method"),
    pytest.param(
        lambda widget: widget.int_method_args(I_VALUE, S_VALUE, O_VALUE),
        "int_method_args",
        0,
        id="int_method_args",
    ),
    pytest.param(lambda widget: widget.object_method(), "object_method", O_VALUE, id="object_method"),
    pytest.param(
        lambda widget: widget.object_method_args(I_VALUE, S_VALUE, O_VALUE),
        "object_method_args",
        O_VALUE,
        id="object_method_args",
    ),
    pytest.param(lambda widget: widget.int_method_override(), "int_method_override", 0, id="override()"),
    pytest.param(lambda widget: widget.int_method_override(I_VALUE), "int_method_override", 0, id="override(int)"),
    pytest.param(lambda widget: widget.int_method_override(S_VALUE), "int_method_override", 0, id="override(str)"),
    pytest.param(lambda widget: widget.int_method_override(O_VALUE), "int_method_override", 0, id="override(obj)"),
    pytest.param(lambda widget: widget.integer, "get_integer", 0, id="get_property"),
    pytest.param(lambda widget: widget[1], "get_Item", 99, id="get_int_index"),
    pytest.param(lambda widget: widget["hello"], "get_Item", "moon", id="get_str_index"),
]


@pytest.mark.parametrize(("action", "member_name", "expected_args"), VOID_CASES)
def test_void_members_forward_once(
    action: Callable[[Widget], None],
    member_name: str,
    expected_args: tuple[object, ...],
) -> None:
    """Members without a value reach the handler once with packed arguments."""
    handler = RecordingHandler({member_name: "ignored"})
    widget: Widget = create_proxy(Widget, handler)

    result: object = action(widget)

    assert result is None
    assert handler.names == [member_name]
    member, args = handler.last_call
    assert args == expected_args
    for actual, expected in zip(args, expected_args):
        assert actual is expected


@pytest.mark.parametrize(("action", "member_name", "return_value"), VALUE_CASES)
def test_value_members_return_handler_result(
    action: Callable[[Widget], object],
    member_name: str,
    return_value: object,
) -> None:
    """Members with a value return the handler's result as the declared type."""
    handler = RecordingHandler({member_name: return_value})
    widget: Widget = create_proxy(Widget, handler)

    result: object = action(widget)

    assert type(result) is type(return_value)
    assert result == return_value
    assert handler.names == [member_name]


def test_arguments_keep_order_and_identity() -> None:
    """Arguments arrive as an ordered tuple of the caller's own objects."""
    handler = RecordingHandler()
    widget: Widget = create_proxy(Widget, handler)
    payload = Payload(1, "one")

    widget.void_method_args(I_VALUE, S_VALUE, payload)

    member, args = handler.last_call
    assert member.name == "void_method_args"
    assert args == (10, "payload", payload)
    assert args[2] is payload
    assert isinstance(args, tuple) is True


def test_parameterless_member_gets_empty_arguments() -> None:
    """A parameterless member forwards an empty argument tuple."""
    handler = RecordingHandler()
    widget: Widget = create_proxy(Widget, handler)

    widget.void_method()

    assert handler.calls == [(handler.last_call[0], ())]
    assert handler.last_call[0].name == "void_method"


def test_object_results_keep_identity() -> None:
    """Class-typed results are the handler's own object."""
    payload = Payload(7, "seven")
    widget: Widget = create_proxy(Widget, RecordingHandler({"object_method": payload}))
    assert widget.object_method() is payload


def test_overloads_are_distinguished_by_signature() -> None:
    """Each overload reaches the handler with its own parameter-type sequence."""
    handler = RecordingHandler({"int_method_override": 5})
    widget: Widget = create_proxy(Widget, handler)

    widget.int_method_override()
    widget.int_method_override(1)
    widget.int_method_override("text")
    widget.int_method_override(O_VALUE)
    widget.int_method_override(0)
    widget.int_method_override(i=3)

    parameter_types: list[tuple[object, ...]] = [member.parameter_types for member, _ in handler.calls]
    assert parameter_types == [(), (int,), (str,), (Payload,), (int,), (int,)]
    assert [args for _, args in handler.calls] == [(), (1,), ("text",), (O_VALUE,), (0,), (3,)]
    assert len({member for member, _ in handler.calls}) == 4


def test_overloaded_indexers_dispatch_on_key_type() -> None:
    """Indexer overloads resolve by key and value types."""
    handler = RecordingHandler({"get_Item": None})
    widget: Widget = create_proxy(Widget, handler)

    handler.results["get_Item"] = 99
    assert widget[1] == 99
    handler.results["get_Item"] = "moon"
    assert widget["hello"] == "moon"

    members: list[MemberDescriptor] = [member for member, _ in handler.calls]
    assert [member.parameter_types for member in members] == [(int,), (str,)]
    assert [member.return_type for member in members] == [int, str]


def test_no_matching_overload() -> None:
    """Calls no overload accepts raise without reaching the handler."""
    handler = RecordingHandler()
    widget: Widget = create_proxy(Widget, handler)

    with pytest.raises(NoMatchingOverload) as raised:
        widget.int_method_override(1.5)
    assert raised.value.attribute_name == "int_method_override"

    with pytest.raises(NoMatchingOverload):
        widget[1] = "mismatched"

    assert handler.calls == []


def test_single_signature_members_bind_like_python_calls() -> None:
    """Wrong arity is a ``TypeError`` and never reaches the handler."""
    handler = RecordingHandler()
    widget: Widget = create_proxy(Widget, handler)

    with pytest.raises(TypeError):
        widget.void_method_args(1, 2)

    widget.void_method_args(o=O_VALUE, s="kw", i=4)

    assert handler.names == ["void_method_args"]
    assert handler.last_call[1] == (4, "kw", O_VALUE)


def test_defaults_variadics_and_dunders() -> None:
    """Defaults are applied and variadic parameters are packed as single values."""
    handler = RecordingHandler({"increment": 2, "__len__": 3, "describe": "a-b"})
    counter: Counter = create_proxy(Counter, handler)

    assert counter.increment() == 2
    assert len(counter) == 3
    assert counter.describe("a", "b", sep="-") == "a-b"

    assert [args for _, args in handler.calls] == [(1,), (), (("a", "b"), {"sep": "-"})]


def test_annotated_attributes_are_properties() -> None:
    """Annotation-only members read and write through the handler."""
    handler = RecordingHandler({"get_count": 4, "get_label": "counter"})
    counter: Counter = create_proxy(Counter, handler)

    counter.count = 9
    assert counter.count == 4
    assert counter.label == "counter"
    with pytest.raises(AttributeError):
        counter.label = "renamed"

    assert handler.names == ["set_count", "get_count", "get_label"]
    assert handler.calls[0][1] == (9,)


def test_multi_parameter_indexer_spreads_tuple_keys() -> None:
    """``grid[row, column]`` passes both index values separately."""
    handler = RecordingHandler({"get_Item": 0.5})
    grid: Grid = create_proxy(Grid, handler)

    assert grid[1, 2] == 0.5
    grid[3, 4] = 1.5

    assert [(member.name, args) for member, args in handler.calls] == [
        ("get_Item", (1, 2)),
        ("set_Item", (3, 4, 1.5)),
    ]


def test_proxies_share_one_generated_type() -> None:
    """Proxies of one interface are distinct instances of one type."""
    first_handler = RecordingHandler()
    second_handler = RecordingHandler()
    first: Widget = create_proxy(Widget, first_handler)
    second: Widget = create_proxy(Widget, second_handler)
    same_handler: Widget = create_proxy(Widget, first_handler)

    assert type(first) is type(second)
    assert type(first) is type(same_handler)
    assert type(first) is proxy_type_for(Widget)
    assert first is not second
    assert first is not same_handler
    assert type(first).__name__ == "Widget_Proxy"
    assert Widget in type(first).__mro__
    assert issubclass(type(first), InterfaceProxyBase) is True

    first.void_method()
    assert first_handler.names == ["void_method"]
    assert second_handler.names == []


def test_proxy_type_describes_its_interface() -> None:
    """Generated types expose their interface, members and signatures."""
    proxy_type: type = proxy_type_for(Widget)
    assert proxy_type.__proxy_interface__ is Widget
    assert len(proxy_type.__proxy_members__) == 18

    widget: Widget = create_proxy(Widget, RecordingHandler())
    parameters: list[str] = list(inspect.signature(widget.void_method_args).parameters)
    assert parameters == ["i", "s", "o"]


def test_handler_is_immutable() -> None:
    """Only settable interface members accept assignment."""
    handler = RecordingHandler()
    widget: Widget = create_proxy(Widget, handler)

    with pytest.raises(AttributeError):
        widget._call_handler = RecordingHandler()
    with pytest.raises(AttributeError):
        widget.unknown = 1
    with pytest.raises(AttributeError):
        del widget.integer
    with pytest.raises(AttributeError):
        widget.changed = _on_changed

    widget.void_method()
    assert handler.names == ["void_method"]


def test_handler_errors_propagate_unchanged() -> None:
    """Exceptions raised by the handler reach the caller as they are."""
    error = LookupError("no answer")
    widget: Widget = create_proxy(Widget, RaisingHandler(error))

    with pytest.raises(LookupError) as raised:
        widget.int_method()
    assert raised.value is error


@pytest.mark.parametrize(
    "handler",
    [
        pytest.param(None, id="none"),
        pytest.param(object(), id="no-handle-call"),
        pytest.param(type("NotCallable", (), {"handle_call": 3})(), id="handle-call-not-callable"),
    ],
)
def test_invalid_handler_is_rejected_before_caching(handler: object) -> None:
    """Invalid handlers fail before the cache is consulted."""
    cache = GenerationCache()
    factory = ProxyFactory(cache)

    with pytest.raises(InvalidHandler):
        factory.create(Widget, handler)

    assert len(cache) == 0
    assert cache.synthesis_count == 0


@pytest.mark.parametrize("candidate", [ConcreteService, AbstractService, 3])
def test_unsupported_types_are_rejected_before_caching(candidate: object) -> None:
    """Non-interfaces fail without synthesizing anything."""
    cache = GenerationCache()
    factory = ProxyFactory(cache)

    with pytest.raises(UnsupportedType):
        factory.create(candidate, RecordingHandler())

    assert len(cache) == 0
    assert cache.synthesis_count == 0


def test_direct_construction_validates_handler() -> None:
    """The generated constructor takes exactly one usable handler."""
    proxy_type: type = proxy_type_for(Widget)
    with pytest.raises(InvalidHandler):
        proxy_type(None)
    with pytest.raises(TypeError):
        proxy_type()


def test_write_only_property_forwards_assignment() -> None:
    """A setter-only property forwards assignment and cannot be read."""

    class Sink(Protocol):
        def _write_level(self, value: int) -> None: ...

        level = property(fset=_write_level)

    handler = RecordingHandler()
    sink: Sink = create_proxy(Sink, handler)

    sink.level = 4
    assert handler.names == ["set_level"]
    assert handler.last_call[1] == (4,)
    with pytest.raises(AttributeError):
        sink.level


def test_class_creation_errors_fail_synthesis() -> None:
    """Errors raised while creating the proxy class are reported per interface."""

    class Sealed(Protocol):
        def __init_subclass__(cls, **kwargs: object) -> None:
            raise TypeError("Sealed cannot be subclassed")

        def ping(self) -> None: ...

    cache = GenerationCache()
    with pytest.raises(SynthesisFailure) as raised:
        ProxyFactory(cache).create(Sealed, RecordingHandler())
    assert raised.value.interface is Sealed
    assert Sealed not in cache


def test_unimplemented_abstract_members_fail_synthesis() -> None:
    """Abstract members outside the interface surface leave the proxy abstract."""

    class Guarded(Protocol):
        @abc.abstractmethod
        def _secret(self) -> int: ...

        def ping(self) -> None: ...

    cache = GenerationCache()
    with pytest.raises(SynthesisFailure):
        ProxyFactory(cache).create(Guarded, RecordingHandler())
    assert len(cache) == 0
