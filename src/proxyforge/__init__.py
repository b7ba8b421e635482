"""Public package API for proxyforge."""

from proxyforge.api import ProxyFactory
from proxyforge.api import create_proxy
from proxyforge.api import proxy_type_for
from proxyforge.cache import GenerationCache
from proxyforge.cache import get_generation_cache
from proxyforge.errors import ConversionFailure
from proxyforge.errors import InvalidHandler
from proxyforge.errors import NoMatchingOverload
from proxyforge.errors import ProxyError
from proxyforge.errors import SynthesisFailure
from proxyforge.errors import UnsupportedType
from proxyforge.handler import CallHandler
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
from proxyforge.members import event
from proxyforge.members import extract_interface_descriptor
from proxyforge.runtime import InterfaceProxyBase

__all__: list[str] = [
    "ProxyFactory",
    "create_proxy",
    "proxy_type_for",
    "event",
    "CallHandler",
    "GenerationCache",
    "get_generation_cache",
    "InterfaceDescriptor",
    "InterfaceProxyBase",
    "MemberDescriptor",
    "MemberKind",
    "extract_interface_descriptor",
    "EVENT_ADD",
    "EVENT_REMOVE",
    "INDEXER_GETTER",
    "INDEXER_SETTER",
    "PLAIN_METHOD",
    "PROPERTY_GETTER",
    "PROPERTY_SETTER",
    "ProxyError",
    "ConversionFailure",
    "InvalidHandler",
    "NoMatchingOverload",
    "SynthesisFailure",
    "UnsupportedType",
]
