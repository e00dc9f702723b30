"""
test_banner_manager.py
----------------------
Unit tests for BannerManager create/update inside one session.
"""
import pytest
from unittest.mock import MagicMock

from sqlalchemy import select

from bannerdb.core.context import RequestContext
from bannerdb.core.exceptions import (
    BannerNotFoundError,
    OperationCancelledError,
    ValidationError,
)
from bannerdb.core.logging_manager import BannerLogger
from bannerdb.database.managers import BannerManager
from bannerdb.database.managers.base_manager import BaseManager
from bannerdb.database.models import Banner, Feature, Tag, banner_feature, banner_tag


def links(session, table, banner_id):
    column = "feature_id" if table is banner_feature else "tag_id"
    return sorted(
        session.scalars(
            select(table.c[column]).where(table.c.banner_id == banner_id)
        ).all()
    )


class TestBannerManagerCreate:
    """Test BannerManager.create() method."""

    def test_create_writes_all_rows(self, banner_manager, db_session):
        """Test create inserts banner, feature, tags and both junctions."""
        banner_id = banner_manager.create({"content": "hello"}, 1, [10, 20])

        banner = db_session.get(Banner, banner_id)
        assert banner.content == "hello"
        assert banner.is_active is True
        assert banner.created_at is not None
        assert db_session.get(Feature, 1) is not None
        assert db_session.get(Tag, 20) is not None
        assert links(db_session, banner_feature, banner_id) == [1]
        assert links(db_session, banner_tag, banner_id) == [10, 20]

    def test_create_reuses_existing_content(self, banner_manager, db_session):
        """Test identical content returns the same id."""
        first = banner_manager.create({"content": "same"}, 1, [10])
        second = banner_manager.create({"content": "same"}, 1, [10])
        assert first == second
        assert len(db_session.scalars(select(Banner)).all()) == 1

    def test_create_reuses_existing_feature_and_tag(self, banner_manager, db_session):
        """Test feature and tag rows are not duplicated."""
        db_session.add_all([Feature(id=1), Tag(id=10)])
        db_session.flush()

        banner_manager.create({"content": "x"}, 1, [10])
        assert len(db_session.scalars(select(Feature)).all()) == 1
        assert len(db_session.scalars(select(Tag)).all()) == 1

    def test_create_retargets_feature_with_warning(self, db_session):
        """Test a reused banner moves to the new feature and a warning is logged."""
        logger = MagicMock(spec=BannerLogger)
        manager = BannerManager(db_session, logger)
        banner_id = manager.create({"content": "x"}, 1, [10])
        manager.create({"content": "x"}, 2, [10])

        assert links(db_session, banner_feature, banner_id) == [2]
        logger.log_warning.assert_called_once()
        assert logger.log_warning.call_args[0][1] == {
            "from_feature_id": 1,
            "to_feature_id": 2,
        }

    def test_create_survives_concurrent_insert(self, banner_manager, db_session, monkeypatch):
        """Test a lost insert race re-reads the winner's row."""
        winner = Banner(content="raced")
        db_session.add(winner)
        db_session.flush()

        real_find = BaseManager._find
        calls = {"count": 0}

        def stale_find(self, model_class, lookup_fields):
            calls["count"] += 1
            if model_class is Banner and calls["count"] == 1:
                return None
            return real_find(self, model_class, lookup_fields)

        monkeypatch.setattr(BaseManager, "_find", stale_find)

        banner_id = banner_manager.create({"content": "raced"}, 1, [10])
        assert banner_id == winner.id
        assert links(db_session, banner_tag, banner_id) == [10]

    @pytest.mark.parametrize(
        "banner, feature_id, tag_ids",
        [
            ({}, 1, [10]),
            ({"content": ""}, 1, [10]),
            ({"content": "x"}, 0, [10]),
            ({"content": "x"}, 1, [10, -1]),
            ({"content": "x", "is_active": "maybe"}, 1, [10]),
        ],
    )
    def test_create_validates_input(self, banner_manager, banner, feature_id, tag_ids):
        """Test invalid payloads are rejected before any statement."""
        with pytest.raises(ValidationError):
            banner_manager.create(banner, feature_id, tag_ids)

    def test_create_checks_context(self, db_session):
        """Test a cancelled context stops the manager."""
        ctx = RequestContext()
        ctx.cancel()
        with pytest.raises(OperationCancelledError, match="get_banner"):
            BannerManager(db_session, ctx=ctx).create({"content": "x"}, 1, [10])


class TestBannerManagerUpdate:
    """Test BannerManager.update() method."""

    def test_update_replaces_everything(self, banner_manager, db_session):
        """Test content, flag, feature and tags are all replaced."""
        banner_id = banner_manager.create({"content": "old"}, 1, [10, 20])
        banner_manager.update(
            {"id": banner_id, "content": "new", "is_active": "false"}, 2, [30]
        )

        row = db_session.execute(
            select(Banner.content, Banner.is_active).where(Banner.id == banner_id)
        ).one()
        assert row == ("new", False)
        assert links(db_session, banner_feature, banner_id) == [2]
        assert links(db_session, banner_tag, banner_id) == [30]

    def test_update_keeps_feature_and_tag_rows(self, banner_manager, db_session):
        """Test replaced features and tags stay in their tables."""
        banner_id = banner_manager.create({"content": "old"}, 1, [10])
        banner_manager.update({"id": banner_id, "content": "old"}, 2, [20])
        assert db_session.get(Feature, 1) is not None
        assert db_session.get(Tag, 10) is not None

    def test_update_with_empty_tag_set(self, banner_manager, db_session):
        """Test an empty tag list clears the banner's tags."""
        banner_id = banner_manager.create({"content": "old"}, 1, [10])
        banner_manager.update({"id": banner_id, "content": "old"}, 1, [])
        assert links(db_session, banner_tag, banner_id) == []

    def test_update_missing_banner(self, banner_manager):
        """Test updating an unknown id raises BannerNotFoundError."""
        with pytest.raises(BannerNotFoundError):
            banner_manager.update({"id": 42, "content": "x"}, 1, [10])

    def test_update_requires_id(self, banner_manager):
        """Test the payload must carry an id."""
        with pytest.raises(ValidationError, match="id"):
            banner_manager.update({"content": "x"}, 1, [10])
