"""Tests for permission evaluation against an identity."""

import os

import pytest

from bcrm.domain.models import Identity
from bcrm.storage import permissions
from bcrm.storage.permissions import (
    PermissionClass,
    can_execute,
    can_read,
    can_traverse_for_read,
    can_traverse_for_write,
    can_write,
    current_identity,
    permission_class,
)


class TestPermissionClass:
    """Test selection of the user/group/other class."""

    def test_owner_uses_user_class(self, make_target, owner_identity):
        target = make_target()
        assert permission_class(target, owner_identity) is PermissionClass.USER

    def test_group_member_uses_group_class(self, make_target):
        target = make_target(uid=0, gid=50)
        identity = Identity(uid=1234, gids=frozenset({50, 1234}))
        assert permission_class(target, identity) is PermissionClass.GROUP

    def test_stranger_uses_other_class(self, make_target, stranger_identity):
        target = make_target()
        assert permission_class(target, stranger_identity) is PermissionClass.OTHER

    def test_owner_wins_over_group(self, make_target, owner_identity):
        """Test the user class applies even when the group also matches."""
        target = make_target(mode=0o070)
        assert permission_class(target, owner_identity) is PermissionClass.USER
        assert not can_read(target, owner_identity)


class TestReadWriteExecute:
    """Test single-bit checks."""

    def test_other_read_only_is_readable_by_stranger(self, make_target, stranger_identity):
        """Test read granted only to other is enough for a stranger."""
        target = make_target(mode=0o004)
        assert can_read(target, stranger_identity)

    def test_cleared_other_read_is_not_readable(self, make_target, stranger_identity):
        target = make_target(mode=0o770)
        assert not can_read(target, stranger_identity)

    def test_group_bits_only_apply_to_group(self, make_target):
        target = make_target(uid=0, gid=50, mode=0o020)
        member = Identity(uid=1234, gids=frozenset({50}))
        outsider = Identity(uid=1234, gids=frozenset({51}))

        assert can_write(target, member)
        assert not can_write(target, outsider)

    def test_other_bits_do_not_apply_to_owner(self, make_target, owner_identity):
        """Test the owner does not fall back to the other class."""
        target = make_target(mode=0o007)
        assert not can_read(target, owner_identity)
        assert not can_write(target, owner_identity)
        assert not can_execute(target, owner_identity)

    @pytest.mark.parametrize(
        "mode, read, write, execute",
        [
            (0o700, True, True, True),
            (0o500, True, False, True),
            (0o300, False, True, True),
            (0o400, True, False, False),
            (0o000, False, False, False),
        ],
    )
    def test_user_bits(self, make_target, owner_identity, mode, read, write, execute):
        target = make_target(mode=mode)
        assert can_read(target, owner_identity) is read
        assert can_write(target, owner_identity) is write
        assert can_execute(target, owner_identity) is execute


class TestTraverse:
    """Test combined directory access checks."""

    def test_read_traverse_needs_both_bits(self, make_target, owner_identity):
        assert can_traverse_for_read(make_target(mode=0o500), owner_identity)
        assert not can_traverse_for_read(make_target(mode=0o400), owner_identity)
        assert not can_traverse_for_read(make_target(mode=0o100), owner_identity)

    def test_write_traverse_needs_both_bits(self, make_target, owner_identity):
        assert can_traverse_for_write(make_target(mode=0o300), owner_identity)
        assert not can_traverse_for_write(make_target(mode=0o500), owner_identity)
        assert not can_traverse_for_write(make_target(mode=0o200), owner_identity)


class TestCurrentIdentity:
    """Test identity discovery for the running process."""

    def test_uses_effective_uid(self):
        identity = current_identity()
        assert identity.uid == os.geteuid()
        assert os.getegid() in identity.gids

    def test_uses_group_database(self, mocker):
        mocker.patch.object(permissions.os, "geteuid", return_value=1000)
        mocker.patch.object(permissions.os, "getegid", return_value=1000)
        mocker.patch.object(
            permissions.pwd,
            "getpwuid",
            return_value=mocker.Mock(pw_name="alice"),
        )
        getgrouplist = mocker.patch.object(
            permissions.os, "getgrouplist", return_value=[1000, 6, 27]
        )

        identity = current_identity()

        getgrouplist.assert_called_once_with("alice", 1000)
        assert identity.gids == frozenset({1000, 6, 27})

    def test_falls_back_without_passwd_entry(self, mocker):
        mocker.patch.object(permissions.os, "geteuid", return_value=4242)
        mocker.patch.object(permissions.os, "getegid", return_value=4242)
        mocker.patch.object(permissions.pwd, "getpwuid", side_effect=KeyError(4242))
        mocker.patch.object(permissions.os, "getgroups", return_value=[100])

        identity = current_identity()

        assert identity.uid == 4242
        assert identity.gids == frozenset({100, 4242})
