"""DRF permission classes backed by the capability table."""

from rest_framework.permissions import BasePermission

from .capabilities import can_perform


class CapabilityPermission(BasePermission):
    capability: str = ""
    message = "You do not have permission to perform this action."

    def has_permission(self, request, view):
        return can_perform(request.user, self.capability)


def HasCapability(capability: str):
    """Build a permission class requiring ``capability``.

    Usage: ``permission_classes = [HasCapability(ADJUST_STOCK)]``.
    """

    return type(
        f"HasCapability[{capability}]",
        (CapabilityPermission,),
        {"capability": capability},
    )
