"""Role to capability resolution.

A single table maps each role to the capabilities it holds. Callers ask
``can_perform(user, capability)`` instead of comparing role strings.
"""

from .choices import Role

ADJUST_STOCK = "adjust-stock"
MANAGE_PRODUCTS = "manage-products"
MANAGE_CATEGORIES = "manage-categories"
MANAGE_USERS = "manage-users"
VIEW_PRODUCTS = "view-products"
VIEW_REPORTS = "view-reports"

ALL_CAPABILITIES = frozenset(
    {ADJUST_STOCK, MANAGE_PRODUCTS, MANAGE_CATEGORIES, MANAGE_USERS, VIEW_PRODUCTS, VIEW_REPORTS}
)

# Held by every authenticated user regardless of role
AUTHENTICATED_CAPABILITIES = frozenset({VIEW_PRODUCTS})

ROLE_CAPABILITIES = {
    Role.ADMIN: ALL_CAPABILITIES,
    Role.MANAGER: ALL_CAPABILITIES - {MANAGE_USERS},
    Role.STOCK_WORKER: frozenset({ADJUST_STOCK, VIEW_PRODUCTS}),
}


def capabilities_for(user) -> frozenset:
    """Return the capabilities held by ``user`` (empty for anonymous users)."""

    if user is None or not getattr(user, "is_authenticated", False):
        return frozenset()
    role = getattr(user, "role", None)
    return ROLE_CAPABILITIES.get(role, frozenset()) | AUTHENTICATED_CAPABILITIES


def can_perform(user, capability: str) -> bool:
    if capability not in ALL_CAPABILITIES:
        raise ValueError(f"Unknown capability: {capability}")
    return capability in capabilities_for(user)
