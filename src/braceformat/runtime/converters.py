"""Custom-type hook.

Values that fit no built-in category are rendered by a converter: a
function ``(writer, value, spec) -> None`` that writes the value's text
through an ArgWriter. The registry maps Python types to converters and
resolves a type once, walking its MRO, then caches the result.

Example:
    >>> registry = ConverterRegistry()
    >>> @registry.converter(complex)
    ... def write_complex(writer, value, spec):
    ...     writer.write(f"{value.real}+{value.imag}i", spec)
    >>> complex in registry
    True

Python 3.13+. Zero external dependencies.
"""

import logging
from collections.abc import Callable, Iterator
from typing import Any, TypeAlias

from braceformat.core import Buffer
from braceformat.syntax import FormatSpec

from .numeric import format_string

__all__ = [
    "ArgWriter",
    "Converter",
    "ConverterRegistry",
    "create_default_registry",
    "default_converter",
    "get_shared_registry",
]

logger = logging.getLogger(__name__)

Converter: TypeAlias = Callable[["ArgWriter", Any, FormatSpec], None]


class ArgWriter:
    """Write handle given to converters.

    Exposes only string writing into the output buffer. The formatter
    itself is not reachable from a converter: it is in the middle of an
    operation and cannot start another.
    """

    __slots__ = ("_buffer",)

    def __init__(self, buffer: Buffer) -> None:
        self._buffer = buffer

    def write(self, text: str | bytes | bytearray | memoryview, spec: FormatSpec) -> None:
        """Write ``text`` padded by string rules (default left alignment).

        ``str`` is encoded as UTF-8; width is counted in bytes.
        """
        if isinstance(text, str):
            text = text.encode("utf-8", "surrogateescape")
        format_string(self._buffer, text, spec)


def default_converter(writer: ArgWriter, value: Any, spec: FormatSpec) -> None:
    """Render ``str(value)`` with string width/fill/alignment rules."""
    writer.write(str(value), spec)


class ConverterRegistry:
    """Maps Python types to converters.

    Lookup walks the type's MRO, so a converter registered for a base class
    serves its subclasses. Types without any registered converter in their
    MRO get the registry's fallback. Each distinct type is resolved once.

    Supports dict-like introspection:
        - __iter__: Iterate over registered types
        - __len__: Count registered converters
        - __contains__: Check if a type has its own converter

    Memory Optimization:
        Uses __slots__ for memory efficiency (avoids per-instance __dict__).
    """

    __slots__ = ("_cache", "_converters", "_fallback", "_frozen")

    def __init__(self, fallback: Converter = default_converter) -> None:
        """Initialize empty registry.

        Args:
            fallback: Converter for types with no registered converter
        """
        self._converters: dict[type, Converter] = {}
        self._cache: dict[type, Converter] = {}
        self._fallback = fallback
        self._frozen = False

    @property
    def frozen(self) -> bool:
        """True once freeze() has been called."""
        return self._frozen

    @property
    def fallback(self) -> Converter:
        """Converter used when nothing in the MRO is registered."""
        return self._fallback

    def register(self, type_: type, func: Converter) -> None:
        """Register ``func`` as the converter of ``type_`` and its subclasses.

        Raises:
            TypeError: If the registry is frozen, ``type_`` is not a class or
                ``func`` is not callable
        """
        if self._frozen:
            msg = (
                "Cannot register converters on a frozen registry; "
                "use copy() to get a modifiable registry"
            )
            raise TypeError(msg)
        if not isinstance(type_, type):
            msg = f"Expected a class, got {type_!r}"
            raise TypeError(msg)
        if not callable(func):
            msg = f"Converter for {type_.__qualname__} must be callable, got {func!r}"
            raise TypeError(msg)
        self._converters[type_] = func
        # Registration can change the resolution of any cached subclass
        self._cache.clear()
        logger.debug("Registered converter %s for %s", _name_of(func), type_.__qualname__)

    def converter(self, type_: type) -> Callable[[Converter], Converter]:
        """Decorator form of register().

        Example:
            >>> registry = ConverterRegistry()
            >>> @registry.converter(set)
            ... def write_set(writer, value, spec):
            ...     writer.write("{" + ", ".join(sorted(map(str, value))) + "}", spec)
        """

        def decorator(func: Converter) -> Converter:
            self.register(type_, func)
            return func

        return decorator

    def resolve(self, type_: type) -> Converter:
        """Return the converter for ``type_``, following its MRO.

        The result is cached per type.
        """
        cached = self._cache.get(type_)
        if cached is not None:
            return cached
        found = self._fallback
        for cls in type_.__mro__:
            func = self._converters.get(cls)
            if func is not None:
                found = func
                break
        self._cache[type_] = found
        return found

    def has_converter(self, type_: type) -> bool:
        """Check whether ``type_`` itself has a registered converter."""
        return type_ in self._converters

    def list_types(self) -> list[type]:
        """List types with registered converters, in registration order."""
        return list(self._converters)

    def freeze(self) -> None:
        """Make the registry read-only. Resolution keeps caching."""
        self._frozen = True

    def copy(self) -> "ConverterRegistry":
        """Create an unfrozen shallow copy.

        Converter functions are shared; registrations on the copy do not
        affect this registry.
        """
        new_registry = ConverterRegistry(self._fallback)
        new_registry._converters = self._converters.copy()
        logger.debug("Copied converter registry with %d converters", len(self._converters))
        return new_registry

    def __iter__(self) -> Iterator[type]:
        return iter(self._converters)

    def __len__(self) -> int:
        return len(self._converters)

    def __contains__(self, type_: object) -> bool:
        return type_ in self._converters

    def __repr__(self) -> str:
        state = ", frozen" if self._frozen else ""
        return f"ConverterRegistry(converters={len(self._converters)}{state})"


def _name_of(func: object) -> str:
    return getattr(func, "__qualname__", None) or repr(func)


def create_default_registry() -> ConverterRegistry:
    """Create a new registry with the default fallback and no converters.

    Returns:
        Fresh, unfrozen ConverterRegistry
    """
    return ConverterRegistry()


# Module-level cached default registry, shared by formatters that are not
# given one. Initialized lazily on first access.
_SHARED_REGISTRY: ConverterRegistry | None = None


def get_shared_registry() -> ConverterRegistry:
    """Get the shared, frozen default registry.

    Calling register() on it raises TypeError. To add converters, use
    ``get_shared_registry().copy()`` or create_default_registry().
    """
    global _SHARED_REGISTRY  # noqa: PLW0603
    if _SHARED_REGISTRY is None:
        _SHARED_REGISTRY = create_default_registry()
        _SHARED_REGISTRY.freeze()
    return _SHARED_REGISTRY
