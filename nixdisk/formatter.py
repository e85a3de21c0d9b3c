"""
Output formatting for Nixdorf 8820 disk image utilities.
"""

import json
import sys

from .models import DirectoryEntry


class OutputFormatter:
    """Handle output formatting (text or JSON)."""

    def __init__(self, json_mode: bool = False):
        self.json_mode = json_mode

    def success(self, message: str, **data) -> None:
        """Output success message."""
        if self.json_mode:
            output = {"status": "success", "message": message, **data}
            print(json.dumps(output))
        else:
            print(message)

    def error(self, message: str) -> None:
        """Output error message."""
        if self.json_mode:
            output = {"status": "error", "message": message}
            print(json.dumps(output))
        else:
            print(f"Error: {message}", file=sys.stderr)

    def text(self, text: str) -> None:
        """Output a report block (text mode only)."""
        if not self.json_mode:
            print(text)

    def list_files(
        self,
        entries: list[DirectoryEntry],
        image_path: str = "",
        base_sector: int | None = None,
        sector_size: int = 128
    ) -> None:
        """Output directory listing."""
        if self.json_mode:
            files = []
            for entry in entries:
                files.append({
                    "name": entry.name,
                    "flag": entry.flag,
                    "system": entry.is_system,
                    "start": entry.start,
                    "offset": entry.offset(base_sector, sector_size)
                    if base_sector is not None else None,
                })
            output = {"status": "success", "image": image_path, "files": files}
            print(json.dumps(output))
            return

        print(f"Directory of {image_path}" if image_path else "Directory")
        print()
        for entry in entries:
            marker = "<SYS>" if entry.is_system else "     "
            line = f"  {entry.name:<8} {marker} {entry.start:>5}"
            if base_sector is not None:
                line += f" (0x{entry.offset(base_sector, sector_size):x})"
            print(line)
        print()
        system = sum(1 for e in entries if e.is_system)
        print(f"  {len(entries)} entries, {system} system")

    def copy_results(self, results: list, source: str, dest: str) -> None:
        """Output the outcome of a multi-file extraction."""
        copied = [r for r in results if r.ok]
        failed = [r for r in results if not r.ok]
        total_bytes = sum(r.size for r in copied)

        if not self.json_mode:
            for r in copied:
                print(f"  {r.name} -> {r.dest} ({r.size:,} bytes)")
            for r in failed:
                print(f"  {r.name}: {r.error}", file=sys.stderr)

        self.success(
            f"Copied {len(copied)} file(s), {total_bytes:,} bytes total"
            + (f", {len(failed)} failed" if failed else ""),
            source=source,
            dest=dest,
            files=len(copied),
            bytes=total_bytes,
            copied=[{"name": r.name, "size": r.size, "dest": r.dest} for r in copied],
            failed=[{"name": r.name, "error": r.error} for r in failed],
        )
