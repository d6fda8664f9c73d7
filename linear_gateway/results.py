"""
Operation results returned by the issue service.

Every operation returns either ``Success`` carrying its payload or ``Failure``
carrying a human-readable message and the kind of failure. Callers branch
with ``isinstance`` or structural pattern matching, never on strings.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Generic, TypeVar, Union

T = TypeVar("T")


class FailureKind(str, Enum):
    """Why an operation failed."""
    NOT_FOUND = "not_found"
    REMOTE_ERROR = "remote_error"


@dataclass(frozen=True)
class Success(Generic[T]):
    data: T
    success: ClassVar[bool] = True

    def to_dict(self) -> dict[str, Any]:
        return {"success": True, "data": self.data}


@dataclass(frozen=True)
class Failure:
    error: str
    kind: FailureKind = FailureKind.REMOTE_ERROR
    success: ClassVar[bool] = False

    @property
    def is_not_found(self) -> bool:
        return self.kind is FailureKind.NOT_FOUND

    def to_dict(self) -> dict[str, Any]:
        return {"success": False, "error": self.error}


Result = Union[Success[T], Failure]


__all__ = ["FailureKind", "Success", "Failure", "Result"]
