from django.db import models
from django.contrib.auth.models import User
from django.db.models.signals import post_save
from django.dispatch import receiver


class UserProfile(models.Model):
    """
    Learner details kept alongside Django's built-in User.

    The user's email doubles as the login username; the profile holds the
    name printed on certificates and the contact details collected at signup.
    """

    user = models.OneToOneField(
        User,
        on_delete=models.CASCADE,
        related_name="profile",
        help_text="The associated Django User account.",
    )
    full_name = models.CharField(max_length=150, blank=True)
    college = models.CharField(max_length=200, blank=True)
    place = models.CharField(max_length=120, blank=True)
    phone_number = models.CharField(max_length=20, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.display_name} ({self.user.email or self.user.username})"

    @property
    def display_name(self):
        return self.full_name or self.user.get_full_name() or self.user.username


@receiver(post_save, sender=User)
def create_user_profile(sender, instance, created, **kwargs):
    # Automatically create profile when a user is created
    if created and not hasattr(instance, "profile"):
        UserProfile.objects.create(user=instance)
