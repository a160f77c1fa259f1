"""
tests/directory/test_engine.py

Unit tests for the pure directory filter/sort engine.
"""

from decimal import Decimal
from uuid import uuid4

import pytest

from gladiator.database.enums import Category, SortOrder
from gladiator.directory import engine
from gladiator.directory.schemas import DirectoryCriteria
from gladiator.profile.schemas import ProfessionalRead


def pro(name: str, **fields) -> ProfessionalRead:
    return ProfessionalRead(id=uuid4(), full_name=name, **fields)


@pytest.fixture
def ana() -> ProfessionalRead:
    return pro("Ana", category=Category.DESIGN, hourly_rate=Decimal("40"), experience_years=3)


@pytest.fixture
def bo() -> ProfessionalRead:
    return pro("Bo", category=Category.IT, hourly_rate=None, experience_years=6)


@pytest.fixture
def catalogue(ana, bo) -> list[ProfessionalRead]:
    return [
        ana,
        bo,
        pro(
            "Cy",
            category=Category.IT,
            hourly_rate=Decimal("20"),
            experience_years=None,
            skills=["Python", "FastAPI"],
        ),
        pro(
            "Di",
            category=Category.WRITING,
            hourly_rate=Decimal("0"),
            experience_years=1,
            bio="Technical copywriter",
        ),
    ]


# --- Scenarios ---


def test_min_price_excludes_unknown_rate(ana, bo):
    criteria = DirectoryCriteria(min_price=Decimal("30"))
    assert engine.search([ana, bo], criteria) == [ana]


def test_experience_sort_orders_descending(ana, bo):
    criteria = DirectoryCriteria(sort_by=SortOrder.EXPERIENCE)
    assert engine.search([ana, bo], criteria) == [bo, ana]


# --- Properties ---


@pytest.mark.parametrize(
    "criteria",
    [
        DirectoryCriteria(),
        DirectoryCriteria(category=Category.IT),
        DirectoryCriteria(search="py"),
        DirectoryCriteria(min_price=Decimal("10"), max_price=Decimal("50")),
        DirectoryCriteria(min_experience=2, sort_by=SortOrder.PRICE_HIGH),
    ],
)
def test_result_is_subset_of_input(catalogue, criteria):
    result = engine.search(catalogue, criteria)
    assert all(p in catalogue for p in result)
    assert len(result) <= len(catalogue)


def test_category_filter_is_exact(catalogue):
    result = engine.search(catalogue, DirectoryCriteria(category=Category.IT))
    assert [p.full_name for p in result] == ["Bo", "Cy"]
    assert all(p.category == Category.IT for p in result)


def test_all_category_bypasses_filter(catalogue):
    assert engine.search(catalogue, DirectoryCriteria(category="all")) == catalogue


def test_price_bound_excludes_null_rate(catalogue):
    result = engine.search(catalogue, DirectoryCriteria(min_price=Decimal("100")))
    assert all(p.hourly_rate is not None for p in result)
    assert "Bo" not in [p.full_name for p in result]


def test_max_price_alone_excludes_null_rate(catalogue):
    result = engine.search(catalogue, DirectoryCriteria(max_price=Decimal("30")))
    assert [p.full_name for p in result] == ["Cy", "Di"]


def test_price_low_puts_unknown_last():
    items = [
        pro("a", hourly_rate=Decimal("50")),
        pro("b", hourly_rate=None),
        pro("c", hourly_rate=Decimal("20")),
    ]
    result = engine.order(items, SortOrder.PRICE_LOW)
    assert [p.hourly_rate for p in result] == [Decimal("20"), Decimal("50"), None]


def test_price_high_puts_unknown_last():
    items = [
        pro("a", hourly_rate=Decimal("50")),
        pro("b", hourly_rate=None),
        pro("c", hourly_rate=Decimal("20")),
    ]
    result = engine.order(items, SortOrder.PRICE_HIGH)
    assert [p.hourly_rate for p in result] == [Decimal("50"), Decimal("20"), None]


def test_sort_is_stable_for_ties():
    first = pro("first", hourly_rate=Decimal("30"), experience_years=None)
    second = pro("second", hourly_rate=Decimal("30"), experience_years=0)
    assert engine.order([first, second], SortOrder.PRICE_LOW) == [first, second]
    assert engine.order([first, second], SortOrder.EXPERIENCE) == [first, second]


def test_newest_keeps_input_order(catalogue):
    assert engine.order(catalogue, SortOrder.NEWEST) == catalogue


def test_zero_min_price_is_a_set_bound(catalogue):
    with_zero = engine.search(catalogue, DirectoryCriteria(min_price=Decimal("0")))
    unset = engine.search(catalogue, DirectoryCriteria(min_price=None))

    assert [p.full_name for p in with_zero] == ["Ana", "Cy", "Di"]
    assert unset == catalogue


def test_min_experience_excludes_unknown(catalogue):
    result = engine.search(catalogue, DirectoryCriteria(min_experience=0))
    assert "Cy" not in [p.full_name for p in result]


# --- Free-text search ---


@pytest.mark.parametrize(
    "query, expected",
    [
        ("  ANA ", ["Ana"]),
        ("fastapi", ["Cy"]),
        ("copywriter", ["Di"]),
        ("   ", ["Ana", "Bo", "Cy", "Di"]),
        ("nobody", []),
    ],
)
def test_search_matches_name_bio_or_skill(catalogue, query, expected):
    result = engine.search(catalogue, DirectoryCriteria(search=query))
    assert [p.full_name for p in result] == expected


# --- Portfolio filter ---


def test_has_portfolio_drops_zero_and_missing(catalogue, ana, bo):
    counts = {ana.id: 2, bo.id: 0}
    result = engine.search(catalogue, DirectoryCriteria(has_portfolio=True), counts)
    assert result == [ana]


def test_has_portfolio_without_counts_drops_everyone(catalogue):
    assert engine.search(catalogue, DirectoryCriteria(has_portfolio=True)) == []


# --- Active filter count ---


@pytest.mark.parametrize(
    "criteria, expected",
    [
        (DirectoryCriteria(), 0),
        (DirectoryCriteria(category=Category.IT, search="x"), 0),
        (DirectoryCriteria(min_price=Decimal("0")), 1),
        (DirectoryCriteria(min_price=Decimal("10"), max_price=Decimal("20")), 1),
        (DirectoryCriteria(min_experience=2, has_portfolio=True), 2),
        (
            DirectoryCriteria(
                max_price=Decimal("5"), min_experience=0, has_portfolio=True, sort_by=SortOrder.PRICE_LOW
            ),
            4,
        ),
    ],
)
def test_active_filter_count(criteria, expected):
    assert engine.active_filter_count(criteria) == expected
