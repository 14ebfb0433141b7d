"""ID generators: CUID2 for record keys, prefixed random hex for client-facing IDs."""

import secrets

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2) for internal records."""
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


def generate_prefixed_id(prefix: str, num_bytes: int = 10) -> str:
    """Generate '<prefix>_<HEX>' from the OS CSPRNG (e.g. 'EDIS_3FA9...').

    Args:
        prefix: Human-readable prefix identifying the record kind.
        num_bytes: Random bytes; 10 bytes gives 80 bits of entropy.

    Returns:
        Upper-case identifier string.
    """
    return f"{prefix}_{secrets.token_hex(num_bytes).upper()}"
