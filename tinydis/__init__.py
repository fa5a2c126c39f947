"""tinydis - a small 16-bit x86 disassembler with a pseudo-code view"""
from tinydis.__version__ import __version__
from tinydis.decoder import DecodeOptions, InstructionDecoder, decode_one, disassemble
from tinydis.models import (
    DecodedInstruction,
    DecodeResult,
    DisassemblyListing,
    PseudoCodeDocument,
    SkippedByte,
    SkipReason,
)
from tinydis.pseudocode import PseudoCodeSynthesizer, synthesize

__all__ = [
    '__version__',
    'DecodeOptions',
    'InstructionDecoder',
    'decode_one',
    'disassemble',
    'DecodedInstruction',
    'DecodeResult',
    'DisassemblyListing',
    'PseudoCodeDocument',
    'SkippedByte',
    'SkipReason',
    'PseudoCodeSynthesizer',
    'synthesize',
]
