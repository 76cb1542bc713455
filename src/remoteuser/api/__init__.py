# SPDX-License-Identifier: Apache-2.0

"""remoteuser API package."""

from remoteuser.api.app import create_app

__all__ = ["create_app"]
