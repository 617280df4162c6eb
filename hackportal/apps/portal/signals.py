from django.conf import settings
from django.db.models.signals import post_save
from django.dispatch import receiver

from hackportal.apps.portal.models import Profile


@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def create_profile_for_new_user(instance, created, **kwargs):
    if not created:
        return
    role = Profile.ADMIN if instance.is_superuser else Profile.PARTICIPANT
    full_name = instance.get_full_name() if hasattr(instance, "get_full_name") else ""
    Profile.objects.get_or_create(
        user=instance,
        defaults={"role": role, "full_name": full_name},
    )
