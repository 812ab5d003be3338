import re
from dataclasses import dataclass
from typing import TextIO

_CONTINUATION_RE = re.compile(r"\\[ \t\f\v]*(?:\r\n|\n|\r)\Z")


@dataclass(frozen=True)
class LogicalLine:
    text: str
    physical_lines: int


def read_logical_line(stream: TextIO) -> LogicalLine | None:
    parts: list[str] = []
    count = 0
    while True:
        physical = stream.readline()
        if not physical:
            break
        count += 1
        match = _CONTINUATION_RE.search(physical)
        if match is None:
            parts.append(physical)
            break
        parts.append(physical[: match.start()])
    if count == 0:
        return None
    return LogicalLine("".join(parts), count)


class LineAssembler:
    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self.physical_lines = 0

    def read(self) -> LogicalLine | None:
        line = read_logical_line(self._stream)
        if line is not None:
            self.physical_lines += line.physical_lines
        return line
