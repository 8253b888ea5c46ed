"""User registration service."""

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model

from .exceptions import UserRegistrationError

User = get_user_model()


@transaction.atomic
def register_user(
    *,
    email: str,
    password: str,
    display_name: str = "",
    phone: str = ""
) -> User:
    """
    Register a new user account.

    Args:
        email: User's email address
        password: User's password (will be hashed)
        display_name: Optional display name
        phone: Optional phone number used for WhatsApp reminders

    Returns:
        Created User instance

    Raises:
        UserRegistrationError: If the email is already taken
    """
    try:
        return User.objects.create_user(
            email=email,
            password=password,
            display_name=display_name,
            phone=phone,
        )
    except IntegrityError:
        raise UserRegistrationError(f"Registration failed: {email} is already registered")
