"""Custom error types for proxyforge."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from proxyforge.members import MemberDescriptor


class ProxyError(Exception):
    """Base class for all proxyforge errors."""


class InvalidHandler(ProxyError):
    """Raised when a proxy is requested without a usable call handler."""


class UnsupportedType(ProxyError):
    """Raised when a proxy is requested for something that is not an interface."""

    requested: object

    def __init__(self, requested: object, reason: str) -> None:
        """Initialize the error.

        :param requested: Value passed where an interface was expected.
        :param reason: Why the value is not an interface contract.
        """
        self.requested = requested
        super().__init__(f"Cannot proxy {requested!r}: {reason}")


class SynthesisFailure(ProxyError):
    """Raised when a proxy type cannot be generated for an interface."""

    interface: type

    def __init__(self, interface: type, message: str) -> None:
        """Initialize the error.

        :param interface: Interface whose proxy type could not be built.
        :param message: Description of the member shape that failed.
        """
        self.interface = interface
        super().__init__(f"Cannot synthesize proxy for {interface.__qualname__}: {message}")


class ConversionFailure(ProxyError):
    """Raised when a handler result does not fit the member's declared return type."""

    member: "MemberDescriptor"
    value: object
    details: str

    def __init__(self, member: "MemberDescriptor", value: object, details: str) -> None:
        """Initialize the error.

        :param member: Member whose invocation produced the value.
        :param value: Value returned by the call handler.
        :param details: Validation details.
        """
        self.member = member
        self.value = value
        self.details = details
        formatted: str = (
            f"Handler returned {type(value).__name__} for {member.signature_text}, "
            + f"which is not convertible to {member.return_type_text}\n{details}"
        )
        super().__init__(formatted)


class NoMatchingOverload(ProxyError):
    """Raised when no overload of a member accepts the call's arguments."""

    attribute_name: str
    call_args: tuple[object, ...]
    call_kwargs: dict[str, object]

    def __init__(self, attribute_name: str, args: tuple[object, ...], kwargs: dict[str, object]) -> None:
        """Initialize the error.

        :param attribute_name: Interface attribute that was called.
        :param args: Positional arguments of the call.
        :param kwargs: Keyword arguments of the call.
        """
        self.attribute_name = attribute_name
        self.call_args = args
        self.call_kwargs = kwargs
        super().__init__(f"No overload of {attribute_name!r} accepts args={args!r} kwargs={kwargs!r}")
