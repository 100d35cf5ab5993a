import pytest

from skillbridge.db import models
from skillbridge.db.pagination import MAX_PAGE_SIZE, Page, paginate


def _query(db_session):
    return db_session.query(models.User).order_by(models.User.id)


def test_page_properties():
    page = Page(items=[1, 2], total_items=5, skip=0, limit=2)
    assert page.total_pages == 3
    assert page.has_next
    last = Page(items=[5], total_items=5, skip=4, limit=2)
    assert not last.has_next
    assert Page(items=[], total_items=0, skip=0, limit=20).total_pages == 0


def test_paginate_slices_and_counts(db_session, user_factory):
    users = [user_factory() for _ in range(5)]
    page = paginate(_query(db_session), skip=2, limit=2)
    assert [u.id for u in page.items] == [users[2].id, users[3].id]
    assert page.total_items == 5
    assert page.skip == 2 and page.limit == 2


def test_skip_past_end_is_empty(db_session, user_factory):
    user_factory()
    page = paginate(_query(db_session), skip=10, limit=5)
    assert page.items == []
    assert page.total_items == 1


@pytest.mark.parametrize("skip,limit", [(-1, 10), (0, 0), (0, MAX_PAGE_SIZE + 1)])
def test_invalid_bounds(db_session, skip, limit):
    with pytest.raises(ValueError):
        paginate(_query(db_session), skip=skip, limit=limit)
