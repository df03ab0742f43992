import functools
import importlib
import pkgutil
from collections.abc import Callable


def import_submodules(package: str) -> list[str]:
    """Import every direct submodule of `package` and return their names."""
    py_package = importlib.import_module(package)
    names = sorted(
        f"{package}.{info.name}"
        for info in pkgutil.iter_modules(py_package.__path__)
    )
    for name in names:
        importlib.import_module(name)
    return names


def scan(package: str):
    """
    Decorator importing the modules of `package` each time the decorated
    function is called, so that decorator-based registrations in them
    (routes, commands) are in place before it runs.
    """
    def decorator(func: Callable):

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            import_submodules(package)
            return func(*args, **kwargs)

        return wrapper

    return decorator
