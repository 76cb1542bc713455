# SPDX-License-Identifier: Apache-2.0

"""Unit tests for the remoteuser principal module."""

from oslotest import base

from remoteuser import principal


class TestPrincipal(base.BaseTestCase):
    """Tests for Principal."""

    def test_defaults(self):
        p = principal.Principal("alice")
        self.assertEqual("alice", p.name)
        self.assertIsNone(p.password)
        self.assertEqual([], p.roles)

    def test_roles_order_and_duplicates(self):
        p = principal.Principal("alice", roles=("b", "a", "b"))
        self.assertEqual(["b", "a", "b"], p.roles)

    def test_has_role(self):
        p = principal.Principal("alice", roles=["admin"])
        self.assertTrue(p.has_role("admin"))
        self.assertFalse(p.has_role("editor"))

    def test_equality(self):
        self.assertEqual(
            principal.Principal("alice", roles=["admin"]),
            principal.Principal("alice", roles=["admin"]),
        )
        self.assertNotEqual(
            principal.Principal("alice", roles=["admin"]),
            principal.Principal("alice", roles=["editor"]),
        )

    def test_repr(self):
        self.assertEqual(
            "Principal(name='alice', roles=['admin'])",
            repr(principal.Principal("alice", roles=["admin"])),
        )


class TestGetUserPrincipal(base.BaseTestCase):
    """Tests for get_user_principal."""

    def test_attached_principal(self):
        p = principal.Principal("alice")
        environ = {principal.ENV_PRINCIPAL: p, "REMOTE_USER": "bob"}
        self.assertIs(p, principal.get_user_principal(environ))

    def test_server_remote_user(self):
        p = principal.get_user_principal({"REMOTE_USER": "bob"})
        self.assertEqual(principal.Principal("bob"), p)

    def test_header_is_not_remote_user(self):
        """Test a client remote-user header is not a server REMOTE_USER."""
        environ = {"HTTP_REMOTE_USER": "mallory"}
        self.assertIsNone(principal.get_user_principal(environ))

    def test_empty_remote_user(self):
        self.assertIsNone(principal.get_user_principal({"REMOTE_USER": ""}))
