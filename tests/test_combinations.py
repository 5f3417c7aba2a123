"""Tests for the combination generator and assignment checks (no database)."""
from types import SimpleNamespace

from catalog.services.combinations import (
    check_assignments,
    count_combinations,
    generate_combinations,
    signature,
)


def _option(id, name, values):
    return SimpleNamespace(id=id, name=name, values=values)


def _values(combos):
    return [tuple(a["value"] for a in combo) for combo in combos]


def test_first_option_varies_slowest():
    options = [_option(1, "A", ["a1", "a2"]), _option(2, "B", ["b1", "b2"])]

    combos = generate_combinations(options)

    assert _values(combos) == [("a1", "b1"), ("a1", "b2"), ("a2", "b1"), ("a2", "b2")]


def test_positions_follow_input_order():
    options = [_option(7, "Size", ["S"]), _option(3, "Color", ["Red"])]

    (combo,) = generate_combinations(options)

    assert combo == [
        {"option_id": 7, "value": "S", "position": 1},
        {"option_id": 3, "value": "Red", "position": 2},
    ]


def test_no_options_means_no_combinations():
    assert generate_combinations([]) == []
    assert count_combinations([]) == 0


def test_output_size_is_product_of_value_counts():
    options = [
        _option(1, "Color", ["Red", "Blue"]),
        _option(2, "Size", ["S", "M", "L"]),
        _option(3, "Fit", ["Slim", "Regular"]),
    ]

    combos = generate_combinations(options)

    assert len(combos) == 12 == count_combinations(options)
    assert len({signature(c) for c in combos}) == 12
    assert all(len(c) == 3 for c in combos)


def test_single_option():
    combos = generate_combinations([_option(1, "Size", ["S", "M", "L"])])
    assert _values(combos) == [("S",), ("M",), ("L",)]


def test_signature_ignores_order_and_positions():
    a = [
        {"option_id": 1, "value": "Red", "position": 1},
        {"option_id": 2, "value": "S", "position": 2},
    ]
    b = [
        {"option_id": 2, "value": "S", "position": 1},
        {"option_id": 1, "value": "Red", "position": 2},
    ]
    assert signature(a) == signature(b)


def test_check_assignments_accepts_valid_combination():
    options = [_option(1, "Color", ["Red", "Blue"]), _option(2, "Size", ["S", "M"])]
    check = check_assignments(
        options,
        [
            {"option_id": 1, "value": "Blue", "position": 1},
            {"option_id": 2, "value": "M", "position": 2},
        ],
    )
    assert check.ok
    assert check.message == ""


def test_check_assignments_rejects_unknown_value():
    options = [_option(1, "Color", ["Red", "Blue"])]

    check = check_assignments(options, [{"option_id": 1, "value": "Green", "position": 1}])

    assert not check.ok
    assert 'Option value "Green" is not valid for option "Color"' in check.message
    assert "Valid values: Red, Blue" in check.message


def test_check_assignments_rejects_foreign_option():
    options = [_option(1, "Color", ["Red"])]

    check = check_assignments(options, [{"option_id": 99, "value": "Red", "position": 1}])

    assert not check.ok
    assert "does not belong" in check.message


def test_check_assignments_rejects_repeats():
    options = [_option(1, "Color", ["Red", "Blue"]), _option(2, "Size", ["S"])]

    repeated_option = check_assignments(
        options,
        [
            {"option_id": 1, "value": "Red", "position": 1},
            {"option_id": 1, "value": "Blue", "position": 2},
        ],
    )
    repeated_position = check_assignments(
        options,
        [
            {"option_id": 1, "value": "Red", "position": 1},
            {"option_id": 2, "value": "S", "position": 1},
        ],
    )

    assert "assigned more than once" in repeated_option.message
    assert "Position 1 is used more than once" in repeated_position.message
