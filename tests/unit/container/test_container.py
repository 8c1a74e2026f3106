from decimal import Decimal

from employee_registry.container import EmployeeContainer


def _keys(employees):
    return [e.key for e in employees]


def test_add_preserves_insertion_order(make_employee):
    c = EmployeeContainer()
    first = make_employee("CD", "2", "1")
    second = make_employee("AB", "1", "2")
    c.add_employee(first)
    c.add_employee(second)

    assert list(c) == [first, second]
    assert len(c) == 2


def test_add_allows_duplicate_keys(make_employee):
    c = EmployeeContainer()
    c.add_employee(make_employee("AB", "1", "10"))
    c.add_employee(make_employee("AB", "1", "20"))
    assert len(c) == 2


def test_sort_by_passport_compares_concatenated_strings(sample_container):
    before = list(sample_container)

    ordered = sample_container.sort_by_passport()

    # A-B12345 and AB-12345 concatenate to the same key; the tie keeps input order
    assert _keys(ordered) == [
        ("AB", "00001"),
        ("AB", "12345"),
        ("A", "B12345"),
        ("CD", "67890"),
    ]
    assert list(sample_container) == before


def test_sort_by_passport_is_lexicographic_not_numeric(make_employee):
    c = EmployeeContainer(
        [
            make_employee("AA", "9", "1"),
            make_employee("AA", "10", "1"),
        ]
    )
    assert _keys(c.sort_by_passport()) == [("AA", "10"), ("AA", "9")]


def test_sort_by_salary_is_stable_and_non_mutating(sample_container):
    before = list(sample_container)

    ordered = sample_container.sort_by_salary()

    assert _keys(ordered) == [
        ("AB", "12345"),
        ("AB", "00001"),
        ("A", "B12345"),
        ("CD", "67890"),
    ]
    for a, b in zip(ordered, ordered[1:]):
        assert a.salary <= b.salary
    assert list(sample_container) == before


def test_sort_by_salary_uses_decimal_magnitude(make_employee):
    c = EmployeeContainer(
        [
            make_employee("A", "1", "100.10"),
            make_employee("A", "2", "100.09"),
            make_employee("A", "3", "99.999"),
        ]
    )
    assert [str(e.salary) for e in c.sort_by_salary()] == ["99.999", "100.09", "100.10"]


def test_search_by_passport_returns_all_matches_in_order(make_employee):
    first = make_employee("AB", "1", "10")
    other = make_employee("AB", "2", "10")
    second = make_employee("AB", "1", "30")
    c = EmployeeContainer([first, other, second])

    assert c.search_by_passport("AB", "1") == [first, second]
    assert c.search_by_passport("ZZ", "1") == []


def test_search_by_salary_is_inclusive(sample_container):
    found = sample_container.search_by_salary(Decimal("50000.00"), Decimal("65000.5"))
    assert _keys(found) == [("AB", "12345"), ("AB", "00001"), ("A", "B12345")]

    assert sample_container.search_by_salary(Decimal("70000"), Decimal("70000")) != []
    assert sample_container.search_by_salary(Decimal("80000"), Decimal("10")) == []


def test_remove_employee_removes_every_match(make_employee):
    c = EmployeeContainer(
        [
            make_employee("AB", "1", "10"),
            make_employee("CD", "2", "10"),
            make_employee("AB", "1", "20"),
        ]
    )

    removed = c.remove_employee("AB", "1")

    assert removed == 2
    assert _keys(c) == [("CD", "2")]
    assert c.search_by_passport("AB", "1") == []


def test_remove_absent_key_is_a_no_op(sample_container):
    before = list(sample_container)
    assert sample_container.remove_employee("ZZ", "0") == 0
    assert list(sample_container) == before


def test_add_sort_search_remove_scenario(make_employee):
    c = EmployeeContainer()
    c.add_employee(make_employee("AB", "12345", "50000.00", ("Teamwork", 4.0)))
    c.add_employee(make_employee("CD", "67890", "70000.00"))

    by_salary = c.sort_by_salary()
    assert [str(e) for e in by_salary] == [
        "Passport: AB-12345, Salary: 50000.00",
        "Passport: CD-67890, Salary: 70000.00",
    ]

    found = c.search_by_passport("AB", "12345")
    assert len(found) == 1
    assert found[0].display_lines() == [
        "Passport: AB-12345, Salary: 50000.00",
        "Characteristic: Teamwork, Rating: 4.0",
    ]

    c.remove_employee("AB", "12345")
    assert _keys(c) == [("CD", "67890")]


def test_serialize_then_deserialize_reproduces_container(tmp_path, sample_container):
    dest = tmp_path / "staff"
    sample_container.serialize(dest)

    loaded = EmployeeContainer.deserialize(dest)

    assert loaded == sample_container
    assert [str(e.salary) for e in loaded] == ["50000.00", "70000.00", "50000.00", "65000.5"]


def test_round_trip_of_empty_container(tmp_path):
    dest = tmp_path / "empty.json"
    EmployeeContainer().serialize(dest)
    assert len(EmployeeContainer.deserialize(dest)) == 0


def test_serialize_overwrites_existing_destination(tmp_path, make_employee):
    dest = tmp_path / "staff.json"
    dest.write_text("old contents", encoding="utf-8")

    c = EmployeeContainer([make_employee("AB", "1", "10")])
    c.serialize(dest)

    assert EmployeeContainer.deserialize(dest) == c
    assert [p.name for p in tmp_path.iterdir()] == ["staff.json"]
