# storage.py
from __future__ import annotations

import json
import logging
import os
import tempfile
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Union

from .core import Characteristic, Employee

logger = logging.getLogger(__name__)

Pathish = Union[str, Path]

FORMAT_NAME = "employee-registry"
FORMAT_VERSION = 1


class PersistenceError(Exception):
    """Raised when a stored container is missing, unreadable or malformed."""


# ---------------- payload <-> records ----------------


def _characteristic_to_json(c: Characteristic) -> Dict[str, Any]:
    return {"property": c.property, "rating": c.rating}


def _employee_to_json(e: Employee) -> Dict[str, Any]:
    return {
        "passport_series": e.passport_series,
        "passport_number": e.passport_number,
        # string keeps the exact value and exponent ("60000.00")
        "salary": str(e.salary),
        "characteristics": [_characteristic_to_json(c) for c in e.characteristics],
    }


def employees_to_payload(employees: Iterable[Employee]) -> Dict[str, Any]:
    return {
        "format": FORMAT_NAME,
        "version": FORMAT_VERSION,
        "employees": [_employee_to_json(e) for e in employees],
    }


def _require_str(obj: Mapping[str, Any], key: str, *, ctx: str) -> str:
    value = obj.get(key)
    if not isinstance(value, str):
        raise PersistenceError(f"{ctx}: '{key}' must be a string, got {value!r}")
    return value


def _parse_salary(raw: Any, *, ctx: str) -> Decimal:
    if not isinstance(raw, str):
        raise PersistenceError(f"{ctx}: 'salary' must be a decimal string, got {raw!r}")
    try:
        d = Decimal(raw)
    except InvalidOperation as e:
        raise PersistenceError(f"{ctx}: invalid salary {raw!r}") from e
    if not d.is_finite():
        raise PersistenceError(f"{ctx}: invalid salary {raw!r}")
    return d


def _characteristic_from_json(obj: Any, *, ctx: str) -> Characteristic:
    if not isinstance(obj, dict):
        raise PersistenceError(f"{ctx}: characteristic must be an object")
    prop = _require_str(obj, "property", ctx=ctx)
    rating = obj.get("rating")
    # bool is an int subclass; reject it explicitly
    if isinstance(rating, bool) or not isinstance(rating, (int, float)):
        raise PersistenceError(f"{ctx}: 'rating' must be a number, got {rating!r}")
    try:
        value = float(rating)
    except OverflowError as e:
        raise PersistenceError(f"{ctx}: rating out of range {rating!r}") from e
    return Characteristic(property=prop, rating=value)


def _employee_from_json(obj: Any, *, ctx: str) -> Employee:
    if not isinstance(obj, dict):
        raise PersistenceError(f"{ctx}: employee must be an object")

    series = _require_str(obj, "passport_series", ctx=ctx)
    number = _require_str(obj, "passport_number", ctx=ctx)
    salary = _parse_salary(obj.get("salary"), ctx=ctx)

    raw_chars = obj.get("characteristics", [])
    if not isinstance(raw_chars, list):
        raise PersistenceError(f"{ctx}: 'characteristics' must be a list")

    chars = [
        _characteristic_from_json(c, ctx=f"{ctx} characteristic #{i}")
        for i, c in enumerate(raw_chars)
    ]
    return Employee(series, number, salary, chars)


def employees_from_payload(payload: Any) -> List[Employee]:
    """
    Validate a decoded document and rebuild its employees.

    Expected shape:
      {"format": "employee-registry", "version": 1, "employees": [...]}
    """
    if not isinstance(payload, dict):
        raise PersistenceError("stored container must be a JSON object")

    fmt = payload.get("format")
    if fmt != FORMAT_NAME:
        raise PersistenceError(f"unknown format {fmt!r} (expected {FORMAT_NAME!r})")

    version = payload.get("version")
    # True == 1 and 1.0 == 1, so check the type as well
    if type(version) is not int or version != FORMAT_VERSION:
        raise PersistenceError(f"unsupported {FORMAT_NAME} version {version!r} (expected {FORMAT_VERSION})")

    raw = payload.get("employees")
    if not isinstance(raw, list):
        raise PersistenceError("'employees' must be a list")

    return [_employee_from_json(item, ctx=f"employee #{i}") for i, item in enumerate(raw)]


# ---------------- file I/O ----------------

_DEFAULT_FILE_MODE = 0o666


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def write_employees(employees: Iterable[Employee], path: Pathish) -> None:
    """
    Write the whole collection to `path`, replacing any existing file.

    The document goes to a sibling temp file first and is renamed into place,
    so readers never observe a half-written destination.
    """
    path = Path(path)
    payload = employees_to_payload(employees)
    try:
        data = (json.dumps(payload, indent=2, ensure_ascii=False) + "\n").encode("utf-8")
    except UnicodeEncodeError as e:
        # lone surrogates from input() under a C locale
        raise PersistenceError(f"cannot write {path}: text is not valid UTF-8 ({e.reason})") from e

    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    except OSError as e:
        raise PersistenceError(f"cannot write {path}: {e}") from e

    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        # mkstemp creates 0600; give the file the mode a plain open() would
        os.chmod(tmp_name, _DEFAULT_FILE_MODE & ~_current_umask())
        os.replace(tmp_name, path)
    except OSError as e:
        raise PersistenceError(f"cannot write {path}: {e}") from e
    finally:
        Path(tmp_name).unlink(missing_ok=True)

    logger.info("saved %d employee(s) to %s", len(payload["employees"]), path)


def read_employees(path: Pathish) -> List[Employee]:
    path = Path(path)
    if not path.exists():
        raise PersistenceError(f"File not found: {path}")

    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("cannot read %s: %s", path, e)
        raise PersistenceError(f"cannot read {path}: {e}") from e

    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, RecursionError) as e:
        logger.warning("%s is not valid JSON: %s", path, e)
        raise PersistenceError(f"{path} is not a valid employee export: {e}") from e

    try:
        employees = employees_from_payload(payload)
    except PersistenceError as e:
        logger.warning("rejected %s: %s", path, e)
        raise PersistenceError(f"{path}: {e}") from e

    logger.info("loaded %d employee(s) from %s", len(employees), path)
    return employees
