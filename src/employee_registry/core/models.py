from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import List, Tuple, Union

PassportKey = Tuple[str, str]
SalaryLike = Union[Decimal, str, int, float]


def _to_salary(value: SalaryLike) -> Decimal:
    if isinstance(value, Decimal):
        d = value
    else:
        # str() first so floats don't drag binary noise into the decimal
        try:
            d = Decimal(str(value))
        except InvalidOperation as e:
            raise ValueError(f"invalid salary: {value!r}") from e
    # NaN would make salary ordering raise
    if not d.is_finite():
        raise ValueError(f"invalid salary: {value!r}")
    return d


@dataclass(frozen=True)
class Characteristic:
    """A single rated property of an employee (e.g. "Teamwork", 4.0)."""

    property: str
    rating: float

    def __str__(self) -> str:
        return f"Characteristic: {self.property}, Rating: {self.rating}"


@dataclass
class Employee:
    """Employee record keyed by passport series and number."""

    passport_series: str
    passport_number: str
    salary: Decimal
    characteristics: List[Characteristic] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.salary = _to_salary(self.salary)

    @property
    def key(self) -> PassportKey:
        return (self.passport_series, self.passport_number)

    def add_characteristic(self, property: str, rating: float) -> Characteristic:
        c = Characteristic(property=property, rating=float(rating))
        self.characteristics.append(c)
        return c

    def display_lines(self) -> List[str]:
        return [str(self)] + [str(c) for c in self.characteristics]

    def __str__(self) -> str:
        return f"Passport: {self.passport_series}-{self.passport_number}, Salary: {self.salary}"
