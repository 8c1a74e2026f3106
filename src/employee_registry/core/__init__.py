from employee_registry.core.models import (  # noqa: F401
    Characteristic,
    Employee,
    PassportKey,
)

__all__ = [
    "Characteristic",
    "Employee",
    "PassportKey",
]
