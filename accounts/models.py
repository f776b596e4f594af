"""
Database tables definition for custom users
"""

from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

class RoleChoices(models.TextChoices):
    VOLUNTEER = "VOLUNTEER", _("Volunteer")
    ORGANIZER = "ORGANIZER", _("Organizer")
    ADMIN = "ADMIN", _("Admin")

class CustomUserManager(BaseUserManager):
    """
    Class for handling custom user creation
    """

    def create_user(self, email, password, **extra_fields):
        """
        Create custom user

        Args:
            email (string)
            password (string)

        Raises:
            ValueError: if email is missing
            ValueError: if password is missing

        Returns:
            created user
        """
        if not email:
            raise ValueError("The Email field must be set")

        if not password:
            raise ValueError("The Password field must be set")

        email = self.normalize_email(email)
        extra_fields.setdefault('is_active', True)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password, **extra_fields):
        """
        Create and return a superuser with the given email and password.
        """
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('role', RoleChoices.ADMIN)

        if not extra_fields.get('is_staff'):
            raise ValueError("Superuser must have is_staff=True.")
        if not extra_fields.get('is_superuser'):
            raise ValueError("Superuser must have is_superuser=True.")

        return self.create_user(email, password, **extra_fields)

    def create_platform_admin(self, email, password, **extra_fields):
        """
        Create a platform admin who may manage the emissions ledgers and
        trigger the monthly Green ICT audit.

        Args:
            email: Email address for the admin
            password: Password for the account
            **extra_fields: Additional fields like display_name, etc.

        Returns:
            CustomUser: Created admin user

        Raises:
            ValueError: If email or password is invalid
        """
        if not email or not password:
            raise ValueError("Email and password are required for a platform admin")

        extra_fields.setdefault('is_staff', True)  # Gives admin interface access
        extra_fields.setdefault('role', RoleChoices.ADMIN)
        return self.create_user(email, password, **extra_fields)

class CustomUser(AbstractBaseUser, PermissionsMixin):
    """
    Custom user model where email is the unique identifier for authentication.
    Volunteers, organizers and admins all share this table; date_joined feeds
    the active-user proxy of the monthly audit.
    """
    email = models.EmailField(unique=True)
    display_name = models.CharField(max_length=120, blank=True)
    date_joined = models.DateTimeField(default=timezone.now, db_index=True)

    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    role = models.CharField(
        max_length=20,
        choices=RoleChoices.choices,
        default=RoleChoices.VOLUNTEER
    )

    objects = CustomUserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []  # Email & password are already required

    def __str__(self):
        return self.email

    @property
    def is_admin(self):
        """Check if user has any admin privileges"""
        return self.is_superuser or self.role == RoleChoices.ADMIN
