"""LCOV tracefile parser.

Only the records needed to attribute uncovered lines to functions are read:

- SF:<source file path>
- DA:<line>,<hit count>[,<checksum>]
- FN:<line>,<name>  or  FN:<line>,<end line>,<name>
- FNDA:<hit count>,<name>
- end_of_record

Everything else (TN, BRDA, LF/LH and the other summary counters) is skipped.
Produced by simplecov-lcov, undercover, pytest-cov, c8, cargo-llvm-cov.
"""

from pathlib import Path

from patchcov.coverage.models import (
    CoverageParseError,
    CoverageReport,
    FileCoverage,
    FunctionCoverage,
)


def _hits(value: str) -> int:
    # some producers write '-' for never executed
    return 0 if value == "-" else int(value)


def _parse_fn(body: str) -> FunctionCoverage:
    """``<start>,<name>`` or ``<start>,<end>,<name>``. Names may contain commas."""
    start, rest = body.split(",", 1)
    end: int | None = None
    head, sep, tail = rest.partition(",")
    if sep and head.isdigit():
        end, rest = int(head), tail
    return FunctionCoverage(name=rest, start_line=int(start), hits=0, end_line=end)


class _FileRecord:
    """Accumulates one SF ... end_of_record block."""

    def __init__(self, path: str) -> None:
        self.coverage = FileCoverage(path=path)
        self._fn_hits: dict[str, int] = {}

    def line(self, body: str) -> None:
        lineno, hits = body.split(",")[:2]
        self.coverage.lines[int(lineno)] = _hits(hits)

    def function(self, body: str) -> None:
        fn = _parse_fn(body)
        self.coverage.functions.setdefault(fn.key, fn)

    def function_hits(self, body: str) -> None:
        hits, name = body.split(",", 1)
        self._fn_hits[name] = _hits(hits)

    def finish(self) -> FileCoverage:
        functions = self.coverage.functions
        for name, hits in self._fn_hits.items():
            matching = [fn for fn in functions.values() if fn.name == name]
            if not matching:
                matching = [FunctionCoverage(name=name, start_line=0, hits=0)]
            # FNDA carries no line, so every function with that name gets the count
            for fn in matching:
                functions[fn.key] = FunctionCoverage(
                    name=name, start_line=fn.start_line, hits=hits, end_line=fn.end_line
                )
        return self.coverage


class LcovParser:
    """Parser for LCOV tracefiles."""

    def parse(self, path: Path, *, base_path: Path | None = None) -> CoverageReport:
        """Parse an LCOV file.

        Args:
            path: LCOV file.
            base_path: When given, relative SF paths are resolved against it
                so every file key is absolute.

        Raises:
            CoverageParseError: If the file is missing or unreadable.
        """
        try:
            content = path.read_text()
        except FileNotFoundError as e:
            raise CoverageParseError(f"LCOV file not found: {path}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise CoverageParseError(f"Failed to read LCOV file {path}: {e}") from e

        report = CoverageReport()
        record: _FileRecord | None = None

        for raw in content.splitlines():
            tag, _, body = raw.strip().partition(":")
            if tag == "SF":
                if record is not None:
                    report.add(record.finish())
                if base_path is not None and not Path(body).is_absolute():
                    body = str(base_path / body)
                record = _FileRecord(body)
            elif tag == "end_of_record":
                if record is not None:
                    report.add(record.finish())
                record = None
            elif record is not None:
                handler = {
                    "DA": record.line,
                    "FN": record.function,
                    "FNDA": record.function_hits,
                }.get(tag)
                if handler is None:
                    continue
                try:
                    handler(body)
                except ValueError:
                    # malformed record; the rest of the block is still usable
                    continue

        if record is not None:
            report.add(record.finish())
        return report
