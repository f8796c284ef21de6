"""Anchor IDL document model.

Only the parts needed to resolve discriminators are typed: program
metadata and the names and stored discriminators of instructions and
events. Everything else (accounts, args, fields, types) is kept as raw
JSON values.

Optional fields are defaulted explicitly after ``json`` parsing rather
than by a schema library, so that the shape checks and their error
messages stay in one place.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

from anchordisc.config import UNKNOWN

logger = logging.getLogger(__name__)


class IdlError(ValueError):
    """The IDL document could not be read or does not have the expected shape."""


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------


def _utf8_str(value: str, path: str) -> str:
    # json accepts lone surrogate escapes that cannot be hashed as UTF-8
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as err:
        raise IdlError(f"{path}: invalid unicode") from err
    return value


def _require_str(obj: dict, key: str, path: str) -> str:
    if key not in obj:
        raise IdlError(f"{path}: missing field '{key}'")
    value = obj[key]
    if not isinstance(value, str):
        raise IdlError(f"{path}.{key}: expected string, got {type(value).__name__}")
    return _utf8_str(value, f"{path}.{key}")


def _optional_str(obj: dict, key: str, path: str) -> Optional[str]:
    value = obj.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise IdlError(f"{path}.{key}: expected string, got {type(value).__name__}")
    return _utf8_str(value, f"{path}.{key}")


def _list(obj: dict, key: str, path: str, required: bool = False) -> list:
    if key not in obj:
        if required:
            raise IdlError(f"{path}: missing field '{key}'")
        return []
    value = obj[key]
    if value is None and not required:
        return []
    if not isinstance(value, list):
        raise IdlError(f"{path}.{key}: expected array, got {type(value).__name__}")
    return value


def _object(value: Any, path: str) -> dict:
    if not isinstance(value, dict):
        raise IdlError(f"{path}: expected object, got {type(value).__name__}")
    return value


def _discriminator(obj: dict, path: str) -> Optional[tuple[int, ...]]:
    value = obj.get("discriminator")
    if value is None:
        return None
    if not isinstance(value, list):
        raise IdlError(
            f"{path}.discriminator: expected array, got {type(value).__name__}"
        )
    out = []
    for i, b in enumerate(value):
        # bool is an int subclass but is never a valid byte here
        if isinstance(b, bool) or not isinstance(b, int) or not 0 <= b <= 255:
            raise IdlError(f"{path}.discriminator[{i}]: invalid byte {b!r}")
        out.append(b)
    return tuple(out)


# ---------------------------------------------------------------------------
# Document types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class IdlMetadata:
    name: str
    version: str
    spec: str = ""
    description: str = ""

    @classmethod
    def from_dict(cls, obj: Any, path: str = "metadata") -> IdlMetadata:
        obj = _object(obj, path)
        return cls(
            name=_require_str(obj, "name", path),
            version=_require_str(obj, "version", path),
            spec=_optional_str(obj, "spec", path) or "",
            description=_optional_str(obj, "description", path) or "",
        )


@dataclass(frozen=True)
class IdlInstruction:
    name: str
    discriminator: Optional[tuple[int, ...]] = None
    accounts: tuple[Any, ...] = ()
    args: tuple[Any, ...] = ()

    @classmethod
    def from_dict(cls, obj: Any, path: str) -> IdlInstruction:
        obj = _object(obj, path)
        return cls(
            name=_require_str(obj, "name", path),
            discriminator=_discriminator(obj, path),
            accounts=tuple(_list(obj, "accounts", path)),
            args=tuple(_list(obj, "args", path)),
        )


@dataclass(frozen=True)
class IdlEvent:
    name: str
    discriminator: Optional[tuple[int, ...]] = None
    fields: tuple[Any, ...] = ()

    @classmethod
    def from_dict(cls, obj: Any, path: str) -> IdlEvent:
        obj = _object(obj, path)
        return cls(
            name=_require_str(obj, "name", path),
            discriminator=_discriminator(obj, path),
            fields=tuple(_list(obj, "fields", path)),
        )


@dataclass(frozen=True)
class Idl:
    instructions: tuple[IdlInstruction, ...]
    events: tuple[IdlEvent, ...] = ()
    name: Optional[str] = None
    version: Optional[str] = None
    metadata: Optional[IdlMetadata] = None
    accounts: tuple[Any, ...] = field(default=(), repr=False)
    types: tuple[Any, ...] = field(default=(), repr=False)

    @classmethod
    def from_dict(cls, obj: Any) -> Idl:
        obj = _object(obj, "idl")
        metadata = obj.get("metadata")
        instructions = _list(obj, "instructions", "idl", required=True)
        events = _list(obj, "events", "idl")
        return cls(
            name=_optional_str(obj, "name", "idl"),
            version=_optional_str(obj, "version", "idl"),
            metadata=None if metadata is None else IdlMetadata.from_dict(metadata),
            instructions=tuple(
                IdlInstruction.from_dict(ix, f"instructions[{i}]")
                for i, ix in enumerate(instructions)
            ),
            events=tuple(
                IdlEvent.from_dict(ev, f"events[{i}]") for i, ev in enumerate(events)
            ),
            accounts=tuple(_list(obj, "accounts", "idl")),
            types=tuple(_list(obj, "types", "idl")),
        )

    @classmethod
    def from_json(cls, text: Union[str, bytes]) -> Idl:
        try:
            obj = json.loads(text)
        except json.JSONDecodeError as err:
            raise IdlError(f"failed to parse IDL JSON: {err}") from err
        return cls.from_dict(obj)

    @property
    def program_name(self) -> str:
        if self.metadata is not None:
            return self.metadata.name
        if self.name is not None:
            return self.name
        return UNKNOWN

    @property
    def program_version(self) -> str:
        if self.metadata is not None:
            return self.metadata.version
        if self.version is not None:
            return self.version
        return UNKNOWN

    def instruction_names(self) -> list[str]:
        return [ix.name for ix in self.instructions]

    def event_names(self) -> list[str]:
        return [ev.name for ev in self.events]


def load_idl(path: Union[str, Path]) -> Idl:
    """Read and parse an IDL JSON file."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as err:
        raise IdlError(f"failed to read IDL file '{path}': {err}") from err
    idl = Idl.from_json(text)
    logger.debug(
        "loaded IDL %s: %d instructions, %d events",
        path,
        len(idl.instructions),
        len(idl.events),
    )
    return idl
