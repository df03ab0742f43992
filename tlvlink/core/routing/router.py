import functools
from typing import Awaitable, Callable

from tlvlink.core.models.message import Message


RouteHandler = Callable[[Message], Awaitable[Message | None]]


class Router:
    """
    Maps message types to asynchronous handlers.

    Each handler is a coroutine accepting the decoded request Message and
    returning the single response Message. A type can be registered once;
    a second registration raises RuntimeError.

    Dispatch itself is implemented by RoutedApplication.
    """

    def __init__(self) -> None:
        self._routes: dict[int, RouteHandler] = {}

    def request(self, message_type: int) -> Callable[[RouteHandler], RouteHandler]:
        def decorator(func: RouteHandler) -> RouteHandler:
            key = int(message_type)
            if key in self._routes:
                raise RuntimeError(f"Handler already registered for type {key}")

            @functools.wraps(func)
            async def wrapper(message: Message) -> Message | None:
                return await func(message)

            self._routes[key] = wrapper
            return wrapper

        return decorator

    def resolve(self, message_type: int) -> RouteHandler | None:
        return self._routes.get(message_type)
