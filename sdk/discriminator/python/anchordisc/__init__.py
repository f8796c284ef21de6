from anchordisc.config import EVENT_NAMESPACE, GLOBAL_NAMESPACE
from anchordisc.discriminator import (
    DISCRIMINATOR_SIZE,
    event_discriminator,
    from_stored,
    get_hash,
    instruction_discriminator,
    preimage,
    to_snake_case,
    validate_discriminator,
)
from anchordisc.idl import Idl, IdlError, IdlEvent, IdlInstruction, IdlMetadata, load_idl
from anchordisc.resolver import (
    Listing,
    NotFound,
    ResolvedDiscriminator,
    event_discriminators,
    find_event,
    find_instruction,
    instruction_discriminators,
    resolve,
)

__all__ = [
    "DISCRIMINATOR_SIZE",
    "EVENT_NAMESPACE",
    "GLOBAL_NAMESPACE",
    "Idl",
    "IdlError",
    "IdlEvent",
    "IdlInstruction",
    "IdlMetadata",
    "Listing",
    "NotFound",
    "ResolvedDiscriminator",
    "event_discriminator",
    "event_discriminators",
    "find_event",
    "find_instruction",
    "from_stored",
    "get_hash",
    "instruction_discriminator",
    "instruction_discriminators",
    "load_idl",
    "preimage",
    "resolve",
    "to_snake_case",
    "validate_discriminator",
]
