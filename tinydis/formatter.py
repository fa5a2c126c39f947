"""Output formatter for the assembly, pseudo-code and hex views"""
from datetime import datetime
from typing import List, Optional, Sequence

from tinydis.models import DisassemblyListing
from tinydis.pseudocode import statements

BANNER_WIDTH = 63
HEX_ROW = 16


class OutputFormatter:
    """Formats decode sessions into text views and reports"""

    def _banner(self, title: str) -> List[str]:
        return [
            "╔" + "═" * BANNER_WIDTH + "╗",
            "║" + title.center(BANNER_WIDTH) + "║",
            "╚" + "═" * BANNER_WIDTH + "╝",
            "",
        ]

    def format_assembly_view(self, listing: DisassemblyListing) -> str:
        """Banner followed by one line per recognized instruction"""
        return "\n".join(self._banner("ASSEMBLY VIEW") + listing.assembly_lines())

    def format_pseudocode_view(self, pseudocode: str) -> str:
        """Banner followed by the synthesized function"""
        return "\n".join(self._banner("PSEUDO-CODE VIEW") + [pseudocode])

    def format_hex_dump(self, data: Sequence[int], name: Optional[str] = None) -> str:
        """
        Classic hex dump: offset, sixteen hex bytes, then printable text.

        Args:
            data: Bytes to dump
            name: Optional file name for the header

        Returns:
            Formatted hex dump
        """
        lines = []
        if name:
            lines.append(f"File: {name}")
        lines.append(f"Size: {len(data):,} bytes (0x{len(data):X})")
        lines.append("")
        lines.append("Offset(h) " + " ".join(f"{i:02X}" for i in range(HEX_ROW)) + "  Decoded text")
        lines.append("═" * 79)

        for offset in range(0, len(data), HEX_ROW):
            row = data[offset:offset + HEX_ROW]
            hex_part = "".join(f"{b:02X} " for b in row).ljust(HEX_ROW * 3)
            text_part = "".join(chr(b) if 32 <= b < 127 else "." for b in row)
            lines.append(f"{offset:08X}  {hex_part} {text_part}")

        return "\n".join(lines)

    def format_report(self, listing: DisassemblyListing, pseudocode: str,
                      source: Optional[str] = None) -> str:
        """
        Format a decode session as a Markdown report.

        Args:
            listing: Result of the decode session
            pseudocode: Synthesized pseudo-code for the listing
            source: Name of the input file, if any

        Returns:
            Markdown report
        """
        lines = ["# 🔍 Disassembly Report"]
        lines.append(f"**Generated**: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
        if source:
            lines.append(f"**File**: `{source}`")
        lines.append(
            f"**Window**: 0x{listing.start_address:08X} - "
            f"0x{listing.base_address + listing.end:08X} ({listing.end - listing.start} bytes)"
        )
        lines.append(
            f"**Instructions**: {len(listing.instructions)} decoded, "
            f"{len(listing.skipped)} bytes skipped"
        )
        lines.append("")

        lines.append("**Summary:**")
        lines.append("```c")
        lines.append(self._oneline_pseudocode(listing))
        lines.append("```")
        lines.append("")

        lines.append("## Assembly")
        lines.append("```asm")
        lines.extend(listing.assembly_lines())
        lines.append("```")
        lines.append("")

        lines.append("## Pseudo-code")
        lines.append("```c")
        lines.append(pseudocode)
        lines.append("```")

        return "\n".join(lines)

    def _oneline_pseudocode(self, listing: DisassemblyListing) -> str:
        """Single-line summary of the first statements"""
        codes = statements(listing.results)
        if len(codes) > 10:
            return " ".join(codes[:10]) + " ..."
        return " ".join(codes) if codes else "// No pseudo-code available"
