import pytest

from hirenet.api.errors import path_label
from hirenet.api.routers.companies import resolve_company_query
from hirenet.config import Settings


@pytest.mark.parametrize(
    ("q", "limit", "expected"),
    [
        (None, None, (None, 100)),
        ("", 25, (None, 25)),
        (None, 50000, (None, 50000)),
        (None, 999999, (None, 50000)),
        ("ac", None, ("ac", 100)),
        ("ac", 50, ("ac", 100)),
        ("ac", 5000, ("ac", 1000)),
        ("a", 10, (None, 10)),
        ("undefined", None, (None, 100)),
    ],
)
def test_company_query_limits(q, limit, expected) -> None:
    assert resolve_company_query(q, limit, Settings()) == expected


def test_path_labels() -> None:
    assert path_label("company_id") == "company ID"
    assert path_label("state_id") == "state ID"
    assert path_label("query") == "query"
