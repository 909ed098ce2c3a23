import asyncio
from types import SimpleNamespace

import pytest

from restaurant_pos.domain.guard import (
    ACCESS_DENIED_NOTICE,
    SESSION_EXPIRED_NOTICE,
    AccessDecision,
    check_route_access,
    guard_route,
    landing_page,
    roles_for_path,
)
from restaurant_pos.domain.roles import (
    can_change_table_status,
    can_deactivate,
    can_manage_role,
    has_permission,
    has_role_at_least,
)
from restaurant_pos.errors import SessionError
from restaurant_pos.models import RoleEnum as R


def test_role_hierarchy():
    assert has_role_at_least(R.owner, R.manager)
    assert has_role_at_least(R.chef, R.waiter)
    assert not has_role_at_least(R.host, R.waiter)
    assert not has_role_at_least(R.manager, R.owner)
    assert has_role_at_least(R.admin, R.owner)


def test_permissions():
    assert has_permission(R.waiter, "payments")
    assert not has_permission(R.host, "orders")
    assert has_permission(R.owner, "reports")
    assert not has_permission(R.manager, "reports")
    assert has_permission(R.admin, "anything")


def test_table_status_roles():
    assert can_change_table_status(R.host)
    assert not can_change_table_status(R.chef)


def test_staff_management_rules():
    assert can_manage_role(R.manager, R.waiter)
    assert not can_manage_role(R.manager, R.manager)
    assert can_manage_role(R.owner, R.manager)
    assert not can_manage_role(R.owner, R.admin)
    assert can_manage_role(R.admin, R.admin)
    assert not can_manage_role(R.waiter, R.host)

    assert can_deactivate(R.owner, R.manager)
    assert not can_deactivate(R.manager, R.owner)


def test_route_table():
    assert roles_for_path("/kitchen") == (R.chef,)
    assert roles_for_path("/reports/") == (R.owner,)
    assert roles_for_path("/unknown") == ()


def test_landing_pages():
    assert landing_page(R.chef) == "/kitchen"
    assert landing_page(R.host) == "/tables"
    assert landing_page(R.admin) == "/system"
    assert landing_page(R.waiter) == "/dashboard"


def test_chef_redirected_from_reports():
    result = check_route_access(R.chef, {R.owner})
    assert result.decision == AccessDecision.redirect_to_role_default
    assert result.location == "/kitchen"
    assert result.notice == ACCESS_DENIED_NOTICE


def test_empty_role_list_allows_everyone():
    assert check_route_access(R.host, ()).decision == AccessDecision.authorized


def test_guard_without_token():
    result = asyncio.run(guard_route(None, (R.owner,)))
    assert result.decision == AccessDecision.redirect_to_login
    assert result.location == "/"
    assert result.notice is None


def test_guard_fetches_profile():
    calls = []

    async def fetch_profile(token):
        calls.append(token)
        return SimpleNamespace(role=R.owner)

    result = asyncio.run(guard_route("tok", (R.owner,), fetch_profile=fetch_profile))
    assert result.decision == AccessDecision.authorized
    assert calls == ["tok"]


def test_guard_uses_loaded_user():
    user = SimpleNamespace(role=R.waiter)
    result = asyncio.run(guard_route("tok", (R.owner,), user=user))
    assert result.decision == AccessDecision.redirect_to_role_default
    assert result.location == "/dashboard"


def test_guard_expired_session():
    async def fetch_profile(token):
        raise SessionError("Token has expired")

    result = asyncio.run(guard_route("stale", (R.waiter,), fetch_profile=fetch_profile))
    assert result.decision == AccessDecision.redirect_to_login
    assert result.notice == SESSION_EXPIRED_NOTICE


@pytest.mark.parametrize("role", list(R))
def test_every_role_lands_on_an_allowed_page(role):
    landing = landing_page(role)
    assert check_route_access(role, roles_for_path(landing)).decision == AccessDecision.authorized
