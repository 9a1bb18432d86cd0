"""Server runtime package for socket lifecycle and operator diagnostics."""

from .lifecycle import LifecycleManager, LifecycleState
from .network import network_resolve_local_ipv4

__all__ = ["LifecycleManager", "LifecycleState", "network_resolve_local_ipv4"]
