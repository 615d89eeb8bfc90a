"""Registry of code generators, keyed by target language."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol, runtime_checkable


@dataclass
class TargetOptions:
    """Options passed to a code generator."""

    pkg_name: str = ""
    client: bool = False
    server: bool = False
    extra: str = ""
    websocket: bool = False


@runtime_checkable
class Generator(Protocol):
    """Something that turns a schema into source code for one target."""

    def gen(self, proto: Any, opts: TargetOptions) -> str:
        ...


GENERATORS: dict[str, Generator] = {}


def register(target: str, generator: Generator) -> None:
    """Register ``generator`` under ``target``, replacing any earlier one."""
    GENERATORS[target] = generator


def get_generator(target: str) -> Optional[Generator]:
    """Return the generator registered for ``target``, or None."""
    return GENERATORS.get(target)