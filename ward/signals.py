"""Model signal handlers pushing table change notifications."""
from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .models import Absence, Card, CardRecord, DutySchedule, Employee, LeaveRecord, ResearchTopic, Schedule
from .services.realtime import broadcast_change

WATCHED_MODELS = (Card, CardRecord, Schedule, Employee, ResearchTopic, LeaveRecord, DutySchedule, Absence)


def _notify(table, event, pk):
    # sent after commit; rolled back writes are never announced
    transaction.on_commit(lambda: broadcast_change(table, event, pk))


@receiver(post_save)
def on_saved(sender, instance, created, **kwargs):
    if sender not in WATCHED_MODELS or kwargs.get('raw'):
        return
    _notify(sender._meta.db_table, 'INSERT' if created else 'UPDATE', instance.pk)


@receiver(post_delete)
def on_deleted(sender, instance, **kwargs):
    if sender not in WATCHED_MODELS:
        return
    _notify(sender._meta.db_table, 'DELETE', instance.pk)
