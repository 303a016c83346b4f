"""Tests for collecting package changes from events"""

from unittest.mock import patch

import pytest

from watchpkg.core.collector import ChangeCollector
from watchpkg.core.models import (
    EventType,
    Notification,
    Package,
    PackageEvent,
    ResultCode,
)
from watchpkg.core.session import WatchSession


def make_collector(packages=None) -> ChangeCollector:
    return ChangeCollector(WatchSession(scripts=["/bin/notify.sh"], packages=packages))


class TestAffectedPackage:
    """Test package identity extraction"""

    def test_install_finished(self):
        """Install events report the installed package"""
        event = PackageEvent.install_finished("curl", "ftp/curl")

        assert ChangeCollector.affected_package(event) == Package("curl", "ftp/curl")

    def test_deinstall_finished(self):
        """Deinstall events report the removed package"""
        event = PackageEvent.deinstall_finished("wget", "ftp/wget")

        assert ChangeCollector.affected_package(event) == Package("wget", "ftp/wget")

    def test_upgrade_finished_uses_new_package(self):
        """Upgrade events report the package as it is after the upgrade"""
        event = PackageEvent.upgrade_finished(
            old=Package("python38", "lang/python38"),
            new=Package("python39", "lang/python39"),
        )

        assert ChangeCollector.affected_package(event) == Package("python39", "lang/python39")

    @pytest.mark.parametrize(
        "event_type",
        [
            EventType.INSTALL_BEGIN,
            EventType.DEINSTALL_BEGIN,
            EventType.UPGRADE_BEGIN,
            EventType.FETCH_FINISHED,
            EventType.NOTICE,
            EventType.ERROR,
        ],
    )
    def test_other_events_are_ignored(self, event_type):
        """Events other than finished operations carry no change"""
        event = PackageEvent(event_type, package=Package("curl", "ftp/curl"))

        assert ChangeCollector.affected_package(event) is None

    def test_none_event(self):
        """A missing event yields no package"""
        assert ChangeCollector.affected_package(None) is None


class TestCollect:
    """Test filtering and storing changes"""

    def test_empty_watch_list_collects_everything(self):
        """Without a watch list every change is stored"""
        collector = make_collector()

        collector.collect(PackageEvent.install_finished("curl", "ftp/curl"))
        collector.collect(PackageEvent.deinstall_finished("wget", "ftp/wget"))

        assert list(collector.session.store) == [
            Notification("curl", "ftp/curl"),
            Notification("wget", "ftp/wget"),
        ]

    def test_unwatched_package_is_dropped(self):
        """A package matching neither by name nor origin is not stored"""
        collector = make_collector(packages=["foo"])

        rc = collector.collect(PackageEvent.install_finished("bar", "cat/bar"))

        assert rc == ResultCode.OK
        assert len(collector.session.store) == 0

    def test_watched_by_name(self):
        """A name match stores the change whatever the origin"""
        collector = make_collector(packages=["foo"])

        collector.collect(PackageEvent.install_finished("foo", "misc/anything"))

        assert list(collector.session.store) == [Notification("foo", "misc/anything")]

    def test_watched_by_origin(self):
        """An origin match stores the change whatever the name"""
        collector = make_collector(packages=["www/nginx"])

        collector.collect(PackageEvent.install_finished("nginx-devel", "www/nginx"))

        assert list(collector.session.store) == [Notification("nginx-devel", "www/nginx")]

    def test_upgrade_filters_on_new_identity(self):
        """The watch list is matched against the upgraded package"""
        collector = make_collector(packages=["python39"])

        collector.collect(
            PackageEvent.upgrade_finished(
                old=Package("python39", "lang/python39"),
                new=Package("python310", "lang/python310"),
            )
        )

        assert len(collector.session.store) == 0

    def test_upgrade_stores_new_identity(self):
        """Upgrades store the new name and origin, not the old ones"""
        collector = make_collector()

        collector.collect(
            PackageEvent.upgrade_finished(
                old=Package("php81", "lang/php81"),
                new=Package("php82", "lang/php82"),
            )
        )

        assert list(collector.session.store) == [Notification("php82", "lang/php82")]

    def test_repeated_events_are_all_stored(self):
        """Each qualifying event produces its own notification"""
        collector = make_collector()

        collector.collect(PackageEvent.install_finished("curl", "ftp/curl"))
        collector.collect(PackageEvent.install_finished("curl", "ftp/curl"))

        assert len(collector.session.store) == 2

    def test_incomplete_package_is_skipped(self):
        """A package without a name or origin is not stored"""
        collector = make_collector()

        collector.collect(PackageEvent(EventType.INSTALL_FINISHED, package=Package("curl", None)))
        collector.collect(PackageEvent(EventType.INSTALL_FINISHED, package=None))

        assert len(collector.session.store) == 0

    def test_always_returns_ok(self):
        """Collection never reports failure"""
        collector = make_collector(packages=["foo"])

        assert collector.collect(None) == ResultCode.OK
        assert collector.collect(PackageEvent(EventType.NOTICE)) == ResultCode.OK
        assert collector.collect(PackageEvent.install_finished("bar", "cat/bar")) == ResultCode.OK
        assert collector.collect(PackageEvent.install_finished("foo", "cat/foo")) == ResultCode.OK

    def test_collector_is_callable(self):
        """The collector can be registered directly as a callback"""
        collector = make_collector()

        assert collector(PackageEvent.install_finished("curl", "ftp/curl")) == ResultCode.OK
        assert len(collector.session.store) == 1

    def test_logs_collected_change(self):
        """Collected changes are logged at debug level"""
        collector = make_collector()

        with patch("watchpkg.core.collector.logger") as mock_logger:
            collector.collect(PackageEvent.install_finished("curl", "ftp/curl"))

            mock_logger.debug.assert_called_once()
            call_args = mock_logger.debug.call_args
            assert call_args[0][0] == "package_change_collected"
            assert call_args[1]["name"] == "curl"
            assert call_args[1]["origin"] == "ftp/curl"
