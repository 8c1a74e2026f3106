from __future__ import annotations

import logging
from decimal import Decimal
from typing import Callable, Dict, Iterable, List, Optional, Tuple, TypeVar

from .config import AppConfig
from .container import EmployeeContainer
from .core import Employee
from .parsing import InputFormatError, parse_rating, parse_salary, parse_yes_no
from .storage import PersistenceError

logger = logging.getLogger(__name__)

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]
Handler = Callable[[], Optional[int]]

T = TypeVar("T")


MENU_HEADER = "Choose an action:"
INVALID_CHOICE = "Invalid choice. Please try again."


class InteractiveShell:
    """
    Menu-driven front end over an EmployeeContainer.

    Each menu number maps to a handler in a dispatch table. A handler
    returns None to keep looping or an exit status to stop. End of input
    (EOFError from input_fn) ends the session with status 0.
    """

    def __init__(
        self,
        container: Optional[EmployeeContainer] = None,
        *,
        config: Optional[AppConfig] = None,
        input_fn: InputFn = input,
        output_fn: OutputFn = print,
    ) -> None:
        self.container = container if container is not None else EmployeeContainer()
        self.config = config or AppConfig()
        self._input = input_fn
        self._output = output_fn

        self._commands: Dict[str, Tuple[str, Handler]] = {
            "1": ("Display employees", self._cmd_display),
            "2": ("Add employee", self._cmd_add),
            "3": ("Sort employees by salary", self._cmd_sort_by_salary),
            "4": ("Serialize or deserialize container", self._cmd_persist),
            "5": ("Remove employee by passport", self._cmd_remove),
            "6": ("Search employee by passport", self._cmd_search_passport),
            "7": ("Exit", self._cmd_exit),
            "8": ("Sort employees by passport", self._cmd_sort_by_passport),
            "9": ("Search employees by salary range", self._cmd_search_salary),
        }

    # -------- loop --------

    def run(self) -> int:
        try:
            while True:
                self._show_menu()
                choice = self._input("").strip()
                entry = self._commands.get(choice)
                if entry is None:
                    self._output(INVALID_CHOICE)
                    continue
                status = entry[1]()
                if status is not None:
                    return status
        except EOFError:
            logger.debug("input closed, leaving shell")
            return 0

    def _show_menu(self) -> None:
        self._output(MENU_HEADER)
        for number, (label, _) in self._commands.items():
            self._output(f"{number}. {label}")

    # -------- helpers --------

    def _ask(self, prompt: str) -> str:
        return self._input(prompt)

    def _ask_parsed(self, prompt: str, parse: Callable[[str], T]) -> T:
        while True:
            try:
                return parse(self._ask(prompt))
            except InputFormatError as e:
                self._output(f"{e}. Please try again.")

    def _ask_passport(self, action: str) -> Tuple[str, str]:
        series = self._ask(f"Enter passport series to {action}: ")
        number = self._ask(f"Enter passport number to {action}: ")
        return series, number

    def _display(self, employees: Iterable[Employee]) -> None:
        lines: List[str] = []
        for e in employees:
            lines.extend(e.display_lines())
        if not lines:
            self._output("No employees to display.")
            return
        for line in lines:
            self._output(line)

    # -------- commands --------

    def _cmd_display(self) -> None:
        self._display(self.container)

    def _cmd_add(self) -> None:
        series = self._ask("Enter passport series: ")
        number = self._ask("Enter passport number: ")
        salary = self._ask_parsed("Enter salary: ", parse_salary)
        employee = Employee(series, number, salary)

        while True:
            answer = parse_yes_no(self._ask("Add a characteristic (Y/N): "))
            if answer is None:
                self._output("Invalid choice. Please enter Y or N.")
                continue
            if not answer:
                break
            prop = self._ask("Enter characteristic property: ")
            rating = self._ask_parsed("Enter characteristic rating: ", parse_rating)
            employee.add_characteristic(prop, rating)

        self.container.add_employee(employee)
        self._output("Employee added.")

    def _cmd_sort_by_salary(self) -> None:
        self._display(self.container.sort_by_salary())

    def _cmd_sort_by_passport(self) -> None:
        self._display(self.container.sort_by_passport())

    def _cmd_persist(self) -> None:
        name = self._ask("Enter the file name for serialization or deserialization: ").strip()
        if not name:
            self._output("File name must not be empty.")
            return

        path = self.config.resolve(name)
        if path.exists():
            try:
                loaded = EmployeeContainer.deserialize(path)
            except PersistenceError as e:
                # keep the current container untouched
                self._output(f"Could not load data from file '{name}': {e}")
                return
            self.container = loaded
            self._output(f"Data loaded from file '{name}'.")
            return

        try:
            self.container.serialize(path)
        except PersistenceError as e:
            self._output(f"Could not save data to file '{name}': {e}")
            return
        self._output(f"Data saved to file '{name}'.")

    def _cmd_remove(self) -> None:
        series, number = self._ask_passport("remove")
        removed = self.container.remove_employee(series, number)
        if removed:
            self._output(
                f"Employee with passport series {series} and passport number {number} removed."
            )
        else:
            self._output(f"No employees found with passport series {series} and passport number {number}")

    def _cmd_search_passport(self) -> None:
        series, number = self._ask_passport("search")
        found = self.container.search_by_passport(series, number)
        if not found:
            self._output(f"No employees found with passport series {series} and passport number {number}")
            return
        self._output(f"Employees with passport series {series} and passport number {number}:")
        self._display(found)

    def _cmd_search_salary(self) -> None:
        lo: Decimal = self._ask_parsed("Enter minimum salary: ", parse_salary)
        hi: Decimal = self._ask_parsed("Enter maximum salary: ", parse_salary)
        found = self.container.search_by_salary(lo, hi)
        if not found:
            self._output(f"No employees found with salary between {lo} and {hi}")
            return
        self._output(f"Employees with salary between {lo} and {hi}:")
        self._display(found)

    def _cmd_exit(self) -> int:
        return 0
