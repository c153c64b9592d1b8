import logging
from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar

from .config.settings import Settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class Container:
    _factories: dict[type, Callable[[], Any]] = field(default_factory=dict)
    _singletons: dict[type, Any] = field(default_factory=dict)
    _singleton_flags: set[type] = field(default_factory=set)

    def register(
        self, interface: type[T], factory: Callable[[], T], singleton: bool = False
    ) -> None:
        """Register factory for interface.

        Args:
            interface: Interface type.
            factory: Factory function.
            singleton: Whether to cache instance.
        """
        self._factories[interface] = factory
        if singleton:
            self._singleton_flags.add(interface)

    def resolve(self, interface: type[T]) -> T:
        if interface in self._singletons:
            return self._singletons[interface]

        if interface not in self._factories:
            raise KeyError(f"No factory registered for {interface}")

        instance = self._factories[interface]()

        if interface in self._singleton_flags:
            self._singletons[interface] = instance

        return instance

    def reset(self) -> None:
        """Reset singletons (for testing)."""
        self._singletons.clear()


container = Container()


def configure_container(settings: Settings) -> Container:
    """Configure container with all dependencies.

    The transport is shared; every resolve of ChatSession starts a new
    conversation with its own transcript.

    Args:
        settings: Application settings.

    Returns:
        Configured container.
    """
    from .core.protocols.transport import TransportProtocol
    from .core.services.chat_session import ChatSession
    from .infrastructure.transport.httpx_transport import HttpxTransport

    container.register(
        TransportProtocol,
        lambda: HttpxTransport(timeout=settings.llm_timeout),
        singleton=True,
    )

    container.register(
        ChatSession,
        lambda: ChatSession(
            token=settings.openai_api_token,
            model=settings.llm_model,
            transport=container.resolve(TransportProtocol),
            url=settings.llm_url,
            system_prompt=settings.system_prompt,
        ),
    )

    logger.info("Container configured")
    return container
