"""
Table change broadcasts over the Channels layer.

Every write to a watched table is pushed to the ``table.<db_table>``
group as ``{"type": "table.change", "table", "event", "id"}``; clients
re-fetch on receipt.
"""
from __future__ import annotations

import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer

logger = logging.getLogger(__name__)

WATCHED_TABLES = (
    'dsnv',
    'quan_ly_phep',
    'lich_cong_tac',
    'dm_the_cham',
    'quan_ly_the_cham',
    'nckh',
    'lich_truc',
    'quan_so_nghi',
)


def group_name(table: str) -> str:
    return f"table.{table}"


def broadcast_change(table: str, event: str, pk) -> None:
    layer = get_channel_layer()
    if layer is None:
        return
    payload = {"type": "table.change", "table": table, "event": event, "id": pk}
    try:
        async_to_sync(layer.group_send)(group_name(table), payload)
    except Exception:
        # the row is already committed
        logger.warning("broadcast failed for %s %s %s", table, event, pk, exc_info=True)
