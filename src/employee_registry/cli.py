from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from decimal import Decimal
from pathlib import Path
from typing import List, Optional, Sequence

from employee_registry.config import AppConfig, load_app_config
from employee_registry.container import EmployeeContainer
from employee_registry.core import Employee
from employee_registry.parsing import InputFormatError, parse_salary
from employee_registry.shell import InteractiveShell
from employee_registry.storage import PersistenceError, employees_to_payload


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(
        prog="employee-registry",
        description="Manage employee records: add, remove, search, sort and save to file.",
    )
    ap.add_argument("--config", default=None, help="Optional YAML/JSON/TOML config override (merged with pyproject.toml).")
    ap.add_argument("--log-level", default=None, help="Logging level (default from config, WARNING).")
    subparsers = ap.add_subparsers(dest="command")

    shell = subparsers.add_parser("shell", help="Interactive menu (default).")
    shell.set_defaults(func=_cmd_shell)

    auto = subparsers.add_parser("auto", help="Add the demonstration employee and save it without prompting.")
    auto.add_argument("--output", "-o", default=None, help="Destination file (default from config: 'test').")
    auto.set_defaults(func=_cmd_auto)

    show = subparsers.add_parser("show", help="List employees from a saved file.")
    _add_show_args(show)
    show.set_defaults(func=_cmd_show)

    args = ap.parse_args(_normalize_argv(sys.argv[1:] if argv is None else argv))
    if args.command is None:
        args.func = _cmd_shell

    try:
        app_cfg = load_app_config(override_path=Path(args.config) if args.config else None)
        if args.log_level:
            app_cfg = replace(app_cfg, log_level=args.log_level.upper())
        app_cfg.validate()
    except (OSError, ValueError) as e:
        print(str(e), file=sys.stderr)
        return 2

    logging.basicConfig(level=app_cfg.logging_level, format="%(levelname)s %(name)s: %(message)s")
    return args.func(args, app_cfg)


# ---------------- CLI subcommands ----------------


def _normalize_argv(argv: Sequence[str]) -> List[str]:
    # "AUTO", "Auto", ... all select the auto command
    out: List[str] = []
    seen_command = False
    for a in argv:
        if not seen_command and a.lower() == "auto":
            a = "auto"
        if a in ("auto", "shell", "show"):
            seen_command = True
        out.append(a)
    return out


def _add_show_args(ap: argparse.ArgumentParser) -> None:
    ap.add_argument("file", help="File written by the shell's save command or by `auto`.")
    ap.add_argument("--sort", choices=["passport", "salary"], default=None, help="Sort the listing.")
    ap.add_argument("--series", default=None, help="Only employees with this passport series (needs --number).")
    ap.add_argument("--number", default=None, help="Only employees with this passport number (needs --series).")
    ap.add_argument("--min-salary", default=None, help="Lower salary bound (inclusive).")
    ap.add_argument("--max-salary", default=None, help="Upper salary bound (inclusive).")
    ap.add_argument("--json", action="store_true", help="Emit the selected employees as JSON.")
    ap.epilog = _SHOW_EPILOG


def _cmd_shell(args: argparse.Namespace, app_cfg: AppConfig) -> int:
    return InteractiveShell(EmployeeContainer(), config=app_cfg).run()


def build_demo_employee() -> Employee:
    employee = Employee("XYZ", "98765", Decimal("60000.00"))
    employee.add_characteristic("Experience", 5.5)
    return employee


def _cmd_auto(args: argparse.Namespace, app_cfg: AppConfig) -> int:
    name = args.output or app_cfg.auto_destination
    container = EmployeeContainer()
    container.add_employee(build_demo_employee())
    try:
        container.serialize(app_cfg.resolve(name))
    except PersistenceError as e:
        print(str(e), file=sys.stderr)
        return 2
    print(f"Data added and saved to '{name}' file.")
    return 0


def _cmd_show(args: argparse.Namespace, app_cfg: AppConfig) -> int:
    if (args.series is None) != (args.number is None):
        print("--series and --number must be given together", file=sys.stderr)
        return 2

    try:
        container = EmployeeContainer.deserialize(app_cfg.resolve(args.file))
        selected = _select(container, args)
    except (PersistenceError, InputFormatError) as e:
        print(str(e), file=sys.stderr)
        return 2

    if args.json:
        print(json.dumps(employees_to_payload(selected)["employees"], indent=2, ensure_ascii=False))
        return 0

    for e in selected:
        for line in e.display_lines():
            print(line)
    return 0


def _select(container: EmployeeContainer, args: argparse.Namespace) -> List[Employee]:
    if args.sort == "passport":
        employees = container.sort_by_passport()
    elif args.sort == "salary":
        employees = container.sort_by_salary()
    else:
        employees = list(container)

    if args.series is not None:
        matches = container.search_by_passport(args.series, args.number)
        keep = {id(m) for m in matches}
        employees = [e for e in employees if id(e) in keep]

    if args.min_salary is not None or args.max_salary is not None:
        lo = parse_salary(args.min_salary, field_name="Minimum salary") if args.min_salary is not None else None
        hi = parse_salary(args.max_salary, field_name="Maximum salary") if args.max_salary is not None else None
        lo = lo if lo is not None else min((e.salary for e in container), default=Decimal("0"))
        hi = hi if hi is not None else max((e.salary for e in container), default=Decimal("0"))
        matches = container.search_by_salary(lo, hi)
        keep = {id(m) for m in matches}
        employees = [e for e in employees if id(e) in keep]

    return employees


_SHOW_EPILOG = """examples:
  employee-registry auto
  employee-registry show test --sort salary
  employee-registry show staff.json --min-salary 50000 --max-salary 70000 --json
"""


if __name__ == "__main__":
    raise SystemExit(main())
