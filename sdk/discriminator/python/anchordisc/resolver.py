"""Resolve the discriminators of IDL instructions and events.

An entry's stored discriminator wins when it has at least 8 bytes;
otherwise the value is computed from the entry name.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Union

from anchordisc.config import EVENT_NAMESPACE, GLOBAL_NAMESPACE
from anchordisc.discriminator import from_stored, get_hash
from anchordisc.idl import Idl, IdlEvent, IdlInstruction

logger = logging.getLogger(__name__)

INSTRUCTION = "instruction"
EVENT = "event"


@dataclass(frozen=True)
class ResolvedDiscriminator:
    name: str
    namespace: str
    discriminator: bytes
    stored: bool  # taken from the IDL rather than computed


@dataclass(frozen=True)
class NotFound:
    """A requested instruction or event name is absent from the IDL."""

    kind: str  # INSTRUCTION or EVENT
    target: str
    available: tuple[str, ...]


@dataclass(frozen=True)
class Listing:
    instructions: tuple[ResolvedDiscriminator, ...]
    events: tuple[ResolvedDiscriminator, ...]


Resolution = Union[ResolvedDiscriminator, NotFound, Listing]


def resolve_entry(
    entry: Union[IdlInstruction, IdlEvent], namespace: str, is_event: bool
) -> ResolvedDiscriminator:
    stored = from_stored(entry.discriminator)
    if stored is not None:
        return ResolvedDiscriminator(entry.name, namespace, stored, stored=True)
    if entry.discriminator is not None:
        logger.debug(
            "ignoring %d-byte stored discriminator for %r, computing instead",
            len(entry.discriminator),
            entry.name,
        )
    return ResolvedDiscriminator(
        entry.name, namespace, get_hash(namespace, entry.name, is_event), stored=False
    )


def resolve_instruction(ix: IdlInstruction) -> ResolvedDiscriminator:
    return resolve_entry(ix, GLOBAL_NAMESPACE, False)


def resolve_event(ev: IdlEvent) -> ResolvedDiscriminator:
    return resolve_entry(ev, EVENT_NAMESPACE, True)


def instruction_discriminators(idl: Idl) -> list[ResolvedDiscriminator]:
    return [resolve_instruction(ix) for ix in idl.instructions]


def event_discriminators(idl: Idl) -> list[ResolvedDiscriminator]:
    return [resolve_event(ev) for ev in idl.events]


def _find(
    entries: Sequence[Union[IdlInstruction, IdlEvent]], name: str
) -> Optional[Union[IdlInstruction, IdlEvent]]:
    for entry in entries:
        if entry.name == name:
            return entry
    return None


def find_instruction(idl: Idl, name: str) -> Union[ResolvedDiscriminator, NotFound]:
    ix = _find(idl.instructions, name)
    if ix is None:
        return NotFound(INSTRUCTION, name, tuple(idl.instruction_names()))
    return resolve_instruction(ix)


def find_event(idl: Idl, name: str) -> Union[ResolvedDiscriminator, NotFound]:
    ev = _find(idl.events, name)
    if ev is None:
        return NotFound(EVENT, name, tuple(idl.event_names()))
    return resolve_event(ev)


def resolve(
    idl: Idl, instruction: Optional[str] = None, event: Optional[str] = None
) -> Resolution:
    """Resolve one named instruction or event, or list everything.

    An instruction target takes precedence over an event target.
    """
    if instruction is not None:
        return find_instruction(idl, instruction)
    if event is not None:
        return find_event(idl, event)
    return Listing(
        instructions=tuple(instruction_discriminators(idl)),
        events=tuple(event_discriminators(idl)),
    )
