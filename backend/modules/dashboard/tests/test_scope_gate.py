# backend/modules/dashboard/tests/test_scope_gate.py

import pytest

from modules.dashboard.exceptions import ScopeRequiredError
from modules.dashboard.schemas.dashboard_schemas import RoleBucket, ViewerContext
from modules.dashboard.services.scope_gate import resolve_scope, role_bucket_for


def make_viewer(role_code, operator_id=None, user_id="user-1"):
    return ViewerContext(user_id=user_id, role_code=role_code, operator_id=operator_id)


class TestRoleBucket:
    @pytest.mark.parametrize("role_code,bucket", [
        ("SUPER_ADMIN", RoleBucket.PLATFORM),
        ("PLATFORM_SUPPORT", RoleBucket.PLATFORM),
        ("OPERATOR_ADMIN", RoleBucket.OPERATOR_ADMIN),
        ("DISPATCHER", RoleBucket.DISPATCHER),
        ("DRIVER", RoleBucket.DRIVER),
        ("CUSTOMER", RoleBucket.CUSTOMER),
    ])
    def test_known_codes(self, role_code, bucket):
        assert role_bucket_for(role_code) == bucket

    def test_codes_are_case_insensitive(self):
        assert role_bucket_for(" dispatcher ") == RoleBucket.DISPATCHER

    @pytest.mark.parametrize("role_code", ["AUDITOR", "", None])
    def test_unknown_codes_fall_back_to_customer(self, role_code):
        assert role_bucket_for(role_code) == RoleBucket.CUSTOMER


class TestResolveScope:
    """Test the ownership predicate attached to every query"""

    def test_platform_is_unscoped(self):
        scope = resolve_scope(make_viewer("SUPER_ADMIN"))

        assert scope.bucket == RoleBucket.PLATFORM
        assert scope.operator_id is None
        assert scope.customer_id is None

    def test_platform_may_narrow_to_operator(self):
        scope = resolve_scope(make_viewer("PLATFORM_SUPPORT"), "op-x")

        assert scope.operator_id == "op-x"

    def test_operator_admin_pinned_to_own_operator(self):
        scope = resolve_scope(make_viewer("OPERATOR_ADMIN", operator_id="op-x"), "op-y")

        assert scope.bucket == RoleBucket.OPERATOR_ADMIN
        assert scope.operator_id == "op-x"

    @pytest.mark.parametrize("role_code", ["OPERATOR_ADMIN", "DISPATCHER"])
    def test_operator_roles_require_operator(self, role_code):
        with pytest.raises(ScopeRequiredError) as exc_info:
            resolve_scope(make_viewer(role_code))

        assert exc_info.value.error_code == "SCOPE_REQUIRED"
        assert exc_info.value.details["role_code"] == role_code

    def test_driver_keeps_own_operator(self):
        scope = resolve_scope(make_viewer("DRIVER", operator_id="op-x"), "op-y")

        assert scope.bucket == RoleBucket.DRIVER
        assert scope.operator_id == "op-x"
        assert scope.customer_id is None

    def test_driver_without_operator_is_unscoped(self):
        scope = resolve_scope(make_viewer("DRIVER"))

        assert scope.operator_id is None

    def test_customer_sees_own_orders(self):
        scope = resolve_scope(make_viewer("CUSTOMER", user_id="cust-9"), "op-x")

        assert scope.customer_id == "cust-9"
        assert scope.operator_id is None

    def test_customer_keeps_own_operator(self):
        scope = resolve_scope(
            make_viewer("CUSTOMER", user_id="cust-9", operator_id="op-x"), "op-y"
        )

        assert scope.customer_id == "cust-9"
        assert scope.operator_id == "op-x"

    def test_unknown_role_narrows_to_customer(self):
        scope = resolve_scope(make_viewer("SUPERUSER", operator_id="op-x"), "op-y")

        assert scope.bucket == RoleBucket.CUSTOMER
        assert scope.customer_id == "user-1"
        assert scope.operator_id == "op-x"
