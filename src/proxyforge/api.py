"""User-facing API entrypoints for proxyforge."""

from typing import TypeVar

from proxyforge.builder import synthesize_proxy_type
from proxyforge.cache import GenerationCache
from proxyforge.cache import get_generation_cache
from proxyforge.handler import CallHandler
from proxyforge.handler import validate_handler
from proxyforge.members import ensure_interface
from proxyforge.members import extract_interface_descriptor

T = TypeVar("T")


def _synthesize(interface: type) -> type:
    """Extract the descriptor of ``interface`` and build its proxy type."""
    return synthesize_proxy_type(extract_interface_descriptor(interface))


class ProxyFactory:
    """Create handler-bound proxies for interface contracts."""

    _cache: GenerationCache | None

    def __init__(self, cache: GenerationCache | None = None) -> None:
        """Initialize a factory.

        :param cache: Cache of generated types; the process-wide cache when omitted.
        """
        self._cache = cache

    @property
    def cache(self) -> GenerationCache:
        """Return the cache this factory resolves proxy types through.

        :returns: Injected cache, or the process-wide cache.
        """
        if self._cache is None:
            return get_generation_cache()
        return self._cache

    def proxy_type(self, interface: type[T]) -> type[T]:
        """Return the generated proxy type for ``interface``.

        :param interface: Protocol class to implement.
        :returns: Proxy type, synthesized on first use.
        :raises UnsupportedType: If ``interface`` is not an interface contract.
        :raises SynthesisFailure: If the proxy type cannot be generated.
        """
        checked_interface: type = ensure_interface(interface)
        return self.cache.get_or_create(checked_interface, lambda: _synthesize(checked_interface))

    def create(self, interface: type[T], handler: CallHandler) -> T:
        """Create a proxy forwarding every member of ``interface`` to ``handler``.

        :param interface: Protocol class to implement.
        :param handler: Object whose ``handle_call`` receives every member call.
        :returns: New proxy instance bound to ``handler``.
        :raises InvalidHandler: If ``handler`` is missing or has no ``handle_call``.
        :raises UnsupportedType: If ``interface`` is not an interface contract.
        :raises SynthesisFailure: If the proxy type cannot be generated.
        """
        validate_handler(handler)
        proxy_type: type[T] = self.proxy_type(interface)
        return proxy_type(handler)


_DEFAULT_FACTORY: ProxyFactory = ProxyFactory()


def create_proxy(interface: type[T], handler: CallHandler) -> T:
    """Create a proxy for ``interface`` using the process-wide generation cache.

    :param interface: Protocol class to implement.
    :param handler: Object whose ``handle_call`` receives every member call.
    :returns: New proxy instance bound to ``handler``.
    """
    return _DEFAULT_FACTORY.create(interface, handler)


def proxy_type_for(interface: type[T]) -> type[T]:
    """Return the process-wide generated proxy type for ``interface``.

    :param interface: Protocol class to implement.
    :returns: Generated proxy type.
    """
    return _DEFAULT_FACTORY.proxy_type(interface)
