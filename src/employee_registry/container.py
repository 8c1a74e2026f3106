from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable, Iterator, List, Optional, Tuple

from .core import Employee
from .storage import Pathish, read_employees, write_employees

logger = logging.getLogger(__name__)


class EmployeeContainer:
    """
    Ordered, mutable collection of Employee records.

    Insertion order is the iteration order. Queries and sorts return new
    lists and never reorder the container itself. Passport keys are not
    required to be unique: remove/search act on every match.
    """

    def __init__(self, employees: Optional[Iterable[Employee]] = None) -> None:
        self._employees: List[Employee] = list(employees or [])

    def __iter__(self) -> Iterator[Employee]:
        return iter(self._employees)

    def __len__(self) -> int:
        return len(self._employees)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EmployeeContainer):
            return NotImplemented
        return self._employees == other._employees

    def __repr__(self) -> str:
        return f"EmployeeContainer({self._employees!r})"

    @property
    def employees(self) -> Tuple[Employee, ...]:
        return tuple(self._employees)

    # ---- mutations ----

    def add_employee(self, employee: Employee) -> None:
        self._employees.append(employee)

    def remove_employee(self, passport_series: str, passport_number: str) -> int:
        """Remove every employee with this passport; returns how many were removed."""
        key = (passport_series, passport_number)
        kept = [e for e in self._employees if e.key != key]
        removed = len(self._employees) - len(kept)
        self._employees = kept
        logger.debug("removed %d employee(s) with passport %s-%s", removed, passport_series, passport_number)
        return removed

    # ---- queries ----

    def search_by_passport(self, passport_series: str, passport_number: str) -> List[Employee]:
        key = (passport_series, passport_number)
        return [e for e in self._employees if e.key == key]

    def search_by_salary(self, min_salary: Decimal, max_salary: Decimal) -> List[Employee]:
        """Employees with min_salary <= salary <= max_salary, in container order."""
        return [e for e in self._employees if min_salary <= e.salary <= max_salary]

    def sort_by_passport(self) -> List[Employee]:
        # series + number compared as one string; sorted() is stable for ties
        return sorted(self._employees, key=lambda e: e.passport_series + e.passport_number)

    def sort_by_salary(self) -> List[Employee]:
        return sorted(self._employees, key=lambda e: e.salary)

    # ---- persistence ----

    def serialize(self, destination: Pathish) -> None:
        write_employees(self._employees, destination)

    @classmethod
    def deserialize(cls, source: Pathish) -> "EmployeeContainer":
        """Load a container written by serialize(); raises PersistenceError on any failure."""
        return cls(read_employees(source))
