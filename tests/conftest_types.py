"""Sample service contracts and implementations shared by the svcmap tests."""

from abc import ABC, abstractmethod
from typing import Generic, Protocol, TypeVar, runtime_checkable

A = TypeVar("A")
B = TypeVar("B")
K = TypeVar("K")
V = TypeVar("V")
T = TypeVar("T")


# Non-generic contracts

class IWidget(Protocol):
    def render(self) -> str: ...


class IDisposable(Protocol):
    def dispose(self) -> None: ...


@runtime_checkable
class IAuditable(Protocol):
    def audit(self) -> list[str]: ...


class Widget(IWidget, IDisposable, IAuditable):
    def render(self) -> str:
        return "widget"

    def dispose(self) -> None:
        pass

    def audit(self) -> list[str]:
        return []


class Gadget(IDisposable):
    """Implements interfaces, none of them named IGadget."""

    def dispose(self) -> None:
        pass


class Plain:
    """Implements no interface at all."""


class IMailer(ABC):
    @abstractmethod
    def send(self, to: str, body: str) -> None: ...


class BaseMailer(IMailer):
    """Concrete base class, not an interface."""

    def send(self, to: str, body: str) -> None:
        pass


class Mailer(BaseMailer):
    pass


class IMarker(ABC):
    """Marker interface without abstract methods."""


class Marked(IMarker):
    pass


# Generic contracts

class IRepository(Protocol[K, V]):
    def get(self, key: K) -> V: ...


class Repository(IRepository[K, V], Generic[K, V]):
    def get(self, key: K) -> V:
        raise KeyError(key)


class IPair(Protocol[A, B]):
    def first(self) -> A: ...


class Pair(IPair[B, A], Generic[A, B]):
    """Binds its interface with swapped parameters."""

    def first(self) -> B:
        raise NotImplementedError


class IBox(Protocol[T]):
    def unwrap(self) -> T: ...


class Box(IBox[T], IDisposable, Generic[T]):
    """Open generic with one matching generic interface and one non-generic one."""

    def unwrap(self) -> T:
        raise NotImplementedError

    def dispose(self) -> None:
        pass


class IntBox(Box[int]):
    """Non-generic subclass of a closed generic."""


class ICache(Protocol[K]):
    def lookup(self, key: K) -> object: ...


class Cache(ICache[K], Generic[K, V]):
    """Open generic whose matching interface has fewer parameters."""

    def lookup(self, key: K) -> object:
        return None


class IReader(Protocol[T]):
    def read(self) -> T: ...


class BaseReader(IReader[T], Generic[T]):
    def read(self) -> T:
        raise NotImplementedError


class Reader(BaseReader[V], Generic[V]):
    """Inherits IReader through a generic base, re-binding T to V."""
