"""Role permissions for stateless JWT users.

Access tokens carry the identity id in `user_id` and the identity kind in a
`role` claim; `request.user` is a simplejwt `TokenUser` wrapping them.
"""

from rest_framework.permissions import BasePermission

from .choices import IdentityKind


class HasIdentityRole(BasePermission):
    role: str | None = None
    message = "This endpoint is not available for your account type."

    def has_permission(self, request, view) -> bool:
        user = request.user
        if not user or not user.is_authenticated:
            return False
        token = getattr(user, "token", None)
        return token is not None and token.get("role") == self.role


class IsOwner(HasIdentityRole):
    role = IdentityKind.OWNER.value


class IsCustomer(HasIdentityRole):
    role = IdentityKind.CUSTOMER.value
