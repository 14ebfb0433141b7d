"""Tests for domain enums: client status transitions and access categories."""

import pytest

from app.domain.constants import DEFAULT_DELIVERABLES_ACCESS
from app.domain.enums import ACCESS_CATEGORIES, ClientStatus, DeliverableType


@pytest.mark.parametrize(
    ("current", "target", "allowed"),
    [
        (ClientStatus.PENDING, ClientStatus.ACTIVE, True),
        (ClientStatus.SUSPENDED, ClientStatus.ACTIVE, True),
        (ClientStatus.ACTIVE, ClientStatus.SUSPENDED, True),
        (ClientStatus.PENDING, ClientStatus.SUSPENDED, True),
        (ClientStatus.ACTIVE, ClientStatus.PENDING, False),
        (ClientStatus.SUSPENDED, ClientStatus.PENDING, False),
    ],
)
def test_status_transitions(
    current: ClientStatus, target: ClientStatus, allowed: bool
) -> None:
    assert current.can_transition_to(target) is allowed


def test_status_values() -> None:
    assert set(ClientStatus.values()) == {"pending", "active", "suspended"}


def test_access_category_is_plural_type() -> None:
    assert DeliverableType.IMAGE.access_category == "images"
    assert DeliverableType.REPORT.access_category == "reports"
    assert set(ACCESS_CATEGORIES) == {"images", "maps", "models", "videos", "reports"}


def test_default_access_enables_every_category() -> None:
    assert DEFAULT_DELIVERABLES_ACCESS == {c: True for c in ACCESS_CATEGORIES}
