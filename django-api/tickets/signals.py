"""Django signals for cache invalidation."""

from django.core.cache import cache
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from tickets.cache_keys import PROGRAM_LIST_CACHE_KEY, program_cache_key, vouchers_cache_key
from tickets.models import Program, Voucher


@receiver([post_save, post_delete], sender=Program)
def invalidate_program_cache(sender, instance, **kwargs):
    """Invalidate caches when a program is saved or deleted."""
    cache.delete_many([PROGRAM_LIST_CACHE_KEY, program_cache_key(str(instance.pk))])


@receiver([post_save, post_delete], sender=Voucher)
def invalidate_voucher_cache(sender, instance, **kwargs):
    """Invalidate an organization's voucher list when one of its vouchers changes."""
    cache.delete(vouchers_cache_key(str(instance.organization_id)))
