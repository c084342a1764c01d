import json
from channels.generic.websocket import AsyncWebsocketConsumer

from ward.services.realtime import WATCHED_TABLES, group_name


class TableChangesConsumer(AsyncWebsocketConsumer):
    """Forwards change notifications for one table to the client."""

    async def connect(self):
        self.table = self.scope["url_route"]["kwargs"]["table"]
        if self.table not in WATCHED_TABLES:
            await self.close(code=4004)
            return
        self.group = group_name(self.table)
        await self.channel_layer.group_add(self.group, self.channel_name)
        await self.accept()
        await self.send(json.dumps({"type": "welcome", "table": self.table}))

    async def disconnect(self, close_code):
        if getattr(self, "group", None):
            await self.channel_layer.group_discard(self.group, self.channel_name)

    async def table_change(self, event):
        # event: {"type": "table.change", "table": ..., "event": "INSERT|UPDATE|DELETE", "id": ...}
        await self.send(json.dumps(event))
