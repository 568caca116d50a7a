"""
Success-or-failure value returned by the parsers and services.

Leaf decoders raise typed exceptions; the assemblers and the service catch
them at their boundary and hand back a ``Result`` so callers branch on
``is_failure`` instead of wrapping every call in ``try``.
"""
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, List, Optional, TypeVar, cast

T = TypeVar('T')
E = TypeVar('E', bound=Exception)
U = TypeVar('U')


@dataclass(frozen=True)
class Result(Generic[T, E]):
    """Holds either a parsed value or the exception that stopped parsing."""
    _value: Optional[T] = None
    _error: Optional[E] = None

    def __post_init__(self):
        if (self._value is None) == (self._error is None):
            raise ValueError("Result needs a value or an error, not both or neither")

    @classmethod
    def success(cls, value: T) -> 'Result[T, E]':
        return cls(_value=value)

    @classmethod
    def failure(cls, error: E) -> 'Result[T, E]':
        return cls(_error=error)

    @property
    def is_success(self) -> bool:
        return self._error is None

    @property
    def is_failure(self) -> bool:
        return self._error is not None

    @property
    def value(self) -> T:
        """The parsed value; ValueError on a failed result."""
        if self.is_failure:
            raise ValueError(f"No value, result failed with: {self._error}")
        return cast(T, self._value)

    @property
    def error(self) -> E:
        """The stored exception; ValueError on a successful result."""
        if self.is_success:
            raise ValueError("No error, result succeeded")
        return cast(E, self._error)

    def value_or(self, default: T) -> T:
        return cast(T, self._value) if self.is_success else default

    def unwrap(self) -> T:
        """The value, or raise the stored exception."""
        if self.is_failure:
            raise cast(E, self._error)
        return cast(T, self._value)

    def map(self, func: Callable[[T], U]) -> 'Result[U, E]':
        """Apply ``func`` to a success; failures pass through untouched."""
        if self.is_failure:
            return Result.failure(cast(E, self._error))
        return Result.success(func(cast(T, self._value)))

    def map_error(self, func: Callable[[E], Exception]) -> 'Result[T, Exception]':
        """Rewrap a failure, e.g. a parse error into a service error."""
        if self.is_success:
            return Result.success(cast(T, self._value))
        return Result.failure(func(cast(E, self._error)))

    def flat_map(self, func: Callable[[T], 'Result[U, E]']) -> 'Result[U, E]':
        if self.is_failure:
            return Result.failure(cast(E, self._error))
        return func(cast(T, self._value))

    def to_dict(self) -> dict:
        if self.is_success:
            value = self._value
            return {
                'success': True,
                'value': value.to_dict() if hasattr(value, 'to_dict') else value,
                'error': None
            }
        error = self._error
        return {
            'success': False,
            'value': None,
            'error': error.to_dict() if hasattr(error, 'to_dict') else str(error)
        }

    def __bool__(self) -> bool:
        return self.is_success

    def __repr__(self) -> str:
        if self.is_success:
            return f"Success({self._value!r})"
        return f"Failure({self._error!r})"


def success(value: T) -> Result[T, Any]:
    return Result.success(value)


def failure(error: E) -> Result[Any, E]:
    return Result.failure(error)


def collect_results(results: Iterable[Result[T, E]]) -> Result[List[T], E]:
    """All values in order, or the first failure encountered."""
    values = []
    for result in results:
        if result.is_failure:
            return Result.failure(result.error)
        values.append(result.value)
    return Result.success(values)
