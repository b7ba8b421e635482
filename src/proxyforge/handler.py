"""The call handler contract that every proxy forwards to."""

from typing import Protocol

from proxyforge.errors import InvalidHandler
from proxyforge.members import MemberDescriptor


class CallHandler(Protocol):
    """Single decision point for every member call on a proxy."""

    def handle_call(self, member: MemberDescriptor, args: tuple[object, ...]) -> object:
        """Respond to one intercepted member call.

        :param member: Invoked member, with its full parameter-type signature.
        :param args: Actual arguments in declared parameter order.
        :returns: Value for the member's return type; ignored for members
            returning ``None``.
        """
        ...


def validate_handler(handler: object) -> CallHandler:
    """Check that ``handler`` can receive forwarded calls.

    :param handler: Candidate handler.
    :returns: The handler.
    :raises InvalidHandler: If the handler is missing or has no ``handle_call``.
    """
    if handler is None:
        raise InvalidHandler("A call handler is required")
    handle_call: object = getattr(handler, "handle_call", None)
    if callable(handle_call) is False:
        raise InvalidHandler(f"{type(handler).__qualname__} has no callable handle_call")
    return handler
