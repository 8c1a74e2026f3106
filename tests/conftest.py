import sys
from decimal import Decimal
from pathlib import Path

import pytest


ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
if SRC.exists():
    sys.path.insert(0, str(SRC))

from employee_registry.container import EmployeeContainer  # noqa: E402
from employee_registry.core import Employee  # noqa: E402


@pytest.fixture(scope="session")
def project_root() -> Path:
    return ROOT


@pytest.fixture()
def make_employee():
    def _make(series: str, number: str, salary: str, *characteristics):
        e = Employee(series, number, Decimal(salary))
        for prop, rating in characteristics:
            e.add_characteristic(prop, rating)
        return e

    return _make


@pytest.fixture()
def sample_container(make_employee) -> EmployeeContainer:
    return EmployeeContainer(
        [
            make_employee("AB", "12345", "50000.00", ("Teamwork", 4.0)),
            make_employee("CD", "67890", "70000.00"),
            make_employee("AB", "00001", "50000.00", ("Experience", 5.5), ("Teamwork", 3.0)),
            make_employee("A", "B12345", "65000.5"),
        ]
    )
