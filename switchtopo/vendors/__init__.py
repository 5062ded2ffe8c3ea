"""Vendor implementations for switch polling.

Importing this package triggers model registration via @register_model.
"""

import switchtopo.vendors.hp  # noqa: F401
