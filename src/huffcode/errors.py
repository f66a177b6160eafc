"""Typed errors for huffcode.

Single source of truth for exit codes lives here.

Policy:
- Errors are small and boring.
- The CLI maps errors to stable exit codes (see EXIT_* constants).
- docs/exit_codes.md is generated from this module (scripts/gen_exit_codes_md.py).
"""

from __future__ import annotations

from dataclasses import dataclass

# -------------------------
# Exit codes (single source)
# -------------------------

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_GENERIC = 10
EXIT_CORRUPT_PAYLOAD = 11
EXIT_IO_UNAVAILABLE = 12
EXIT_SIZE_MISMATCH = 13


@dataclass(frozen=True, slots=True)
class ExitCodeInfo:
    code: int
    name: str
    description: str


EXIT_CODES: tuple[ExitCodeInfo, ...] = (
    ExitCodeInfo(EXIT_OK, "OK", "Success"),
    ExitCodeInfo(EXIT_USAGE, "USAGE", "Usage error (invalid args, invalid chunk size, etc.)"),
    ExitCodeInfo(EXIT_GENERIC, "GENERIC", "Generic failure (unexpected error)"),
    ExitCodeInfo(
        EXIT_CORRUPT_PAYLOAD,
        "CORRUPT_PAYLOAD",
        "Encoded payload is malformed or truncated (partial output is not rolled back)",
    ),
    ExitCodeInfo(
        EXIT_IO_UNAVAILABLE,
        "IO_UNAVAILABLE",
        "Input or output file cannot be opened, read or written",
    ),
    ExitCodeInfo(
        EXIT_SIZE_MISMATCH, "SIZE_MISMATCH", "Body length disagrees with the header (verify)"
    ),
)

_EXIT_CODE_BY_CODE: dict[int, ExitCodeInfo] = {e.code: e for e in EXIT_CODES}


def exit_code_info(code: int) -> ExitCodeInfo | None:
    return _EXIT_CODE_BY_CODE.get(int(code))


def render_exit_codes_markdown() -> str:
    """Render docs/exit_codes.md content."""
    lines: list[str] = []
    lines.append("# Exit codes\n")
    lines.append("> GENERATED FILE — do not edit manually.\n")
    lines.append("> Source of truth: `src/huffcode/errors.py` (EXIT_CODES).\n")
    lines.append("> Regenerate: `python scripts/gen_exit_codes_md.py`.\n\n")
    lines.append("These are the CLI exit codes you can rely on.\n\n")
    lines.append("| Code | Name | Meaning |\n")
    lines.append("|---:|---|---|\n")
    for e in sorted(EXIT_CODES, key=lambda x: x.code):
        lines.append(f"| {e.code} | `{e.name}` | {e.description} |\n")
    lines.append("\n## Notes\n")
    lines.append("- Internal errors extend `HuffcodeError` and carry an `exit_code`.\n")
    lines.append("- `--debug` re-raises errors to show full stack traces.\n")
    lines.append(
        "- `decode` streams its output: on `CORRUPT_PAYLOAD` the bytes decoded so far stay in the output file.\n"
    )
    return "".join(lines)


# ---------------
# Typed exceptions
# ---------------


class HuffcodeError(Exception):
    """Base error for huffcode."""

    exit_code: int = EXIT_GENERIC


class UsageError(HuffcodeError):
    exit_code = EXIT_USAGE


class CorruptPayload(HuffcodeError):
    exit_code = EXIT_CORRUPT_PAYLOAD


class TruncatedPayload(CorruptPayload):
    pass


class IOUnavailable(HuffcodeError):
    exit_code = EXIT_IO_UNAVAILABLE


class SizeMismatch(HuffcodeError):
    exit_code = EXIT_SIZE_MISMATCH
