# audioprobe/common/result.py
"""
Result pattern for the probe -> normalize -> respond chain.

Failures travel back up as values; the request handler inspects them once
and picks the HTTP status, instead of unwinding with exceptions.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar, cast

from audioprobe.domain.errors import AnalyzeError, ErrorCode

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Usage:
        def probe(path: Path) -> Result[ProbeRawResult]:
            if not shutil.which("ffprobe"):
                return Result.Err(ErrorCode.TOOL_NOT_FOUND, "ffprobe not found")
            return Result.Ok(raw)
    """
    ok: bool
    data: Optional[T] = None
    error: Optional[AnalyzeError] = None

    @staticmethod
    def Ok(data: T) -> "Result[T]":
        return Result(ok=True, data=data)

    @staticmethod
    def Err(code: ErrorCode, message: str, *, stderr: Optional[str] = None, rc: Optional[int] = None) -> "Result[T]":
        return Result(ok=False, error=AnalyzeError(code=code, message=message, stderr=stderr, rc=rc))

    def and_then(self, fn: Callable[[T], "Result[U]"]) -> "Result[U]":
        """Chain the next step if ok, otherwise pass the failure through untouched."""
        if self.ok:
            return fn(cast(T, self.data))
        return cast("Result[U]", self)

    def unwrap(self) -> T:
        """Get data or raise ValueError if error."""
        if self.ok:
            return cast(T, self.data)
        if self.error is None:
            raise RuntimeError("Result is neither ok nor carrying an error")
        raise ValueError(f"[{self.error.code.value}] {self.error.message}")
