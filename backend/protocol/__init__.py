"""
Tick snapshot protocol: variants, reader and writer.
"""

from .variants import (
    ProtocolVariant, BASIC, EXTENDED, AVAILABLE_PROTOCOLS, get_protocol_variant,
)
from .reader import ProtocolReader, TokenStream, parse_world
from .writer import format_world

__all__ = [
    'ProtocolVariant',
    'BASIC',
    'EXTENDED',
    'AVAILABLE_PROTOCOLS',
    'get_protocol_variant',
    'ProtocolReader',
    'TokenStream',
    'parse_world',
    'format_world',
]
