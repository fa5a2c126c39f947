"""
HTTP front end for tinydis.

Serves the assembly and pseudo-code views as JSON using Flask.
"""

from .server import DisassemblerServer, create_app

__all__ = ['DisassemblerServer', 'create_app']
