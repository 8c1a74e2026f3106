from employee_registry.container import EmployeeContainer
from employee_registry.core import Characteristic, Employee

__all__ = [
    "Characteristic",
    "Employee",
    "EmployeeContainer",
]
