from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List

from ..core.address import ADDRESS_MASK


class TraceFormatError(ValueError):
    def __init__(self, path: str, line_number: int, reason: str):
        super().__init__(f"{path}:{line_number}: {reason}")
        self.path = path
        self.line_number = line_number


@dataclass(frozen=True)
class TraceRecord:
    """One memory reference from a trace file. The mnemonic is informational only."""
    op: str
    address: int
    line_number: int


def parse_trace_line(text: str, path: str = "<trace>", line_number: int = 0) -> TraceRecord | None:
    """Parses `<op> <hex address>[,<size>]`. Returns None for blank and comment lines."""
    stripped = text.strip()
    if not stripped or stripped.startswith("#"):
        return None

    fields = stripped.split()
    if len(fields) < 2:
        raise TraceFormatError(path, line_number, f"expected '<op> <hex address>', got '{stripped}'")

    op = fields[0]
    # Valgrind-style traces append the access size after a comma.
    address_field = fields[1].split(",", 1)[0]
    try:
        address = int(address_field, 16)
    except ValueError:
        raise TraceFormatError(path, line_number, f"invalid hex address '{fields[1]}'") from None

    if not 0 <= address <= ADDRESS_MASK:
        raise TraceFormatError(path, line_number, f"address {address_field} does not fit in 32 bits")

    return TraceRecord(op=op, address=address, line_number=line_number)


def read_trace(path: str | Path) -> Iterator[TraceRecord]:
    """Yields the records of a trace file in order."""
    path = Path(path)
    with open(path, "rb") as f:
        for line_number, raw in enumerate(f, start=1):
            try:
                text = raw.decode("utf-8")
            except UnicodeDecodeError:
                raise TraceFormatError(str(path), line_number, "line is not valid UTF-8 text") from None
            record = parse_trace_line(text, str(path), line_number)
            if record is not None:
                yield record


def load_addresses(path: str | Path) -> List[int]:
    """Reads a whole trace into a list of addresses."""
    return [record.address for record in read_trace(path)]
